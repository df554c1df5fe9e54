#!/usr/bin/env python3
# bootverify/ui/utils/ansi.py
from __future__ import annotations

import os
import re
from typing import Any

# ---- Core SGR maps ----------------------------------------------------------

ANSI = {
    # reset
    "reset": "\x1b[0m",

    # styles
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",

    # fg 8-color
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
}

# ---- Cursor / line control --------------------------------------------------

CURSOR_HIDE = "\x1b[?25l"
CURSOR_SHOW = "\x1b[?25h"
# Move to the start of the previous line (CPL)
CURSOR_PREV_LINE = "\x1b[F"
CLEAR_LINE = "\x1b[2K"
CLEAR_SCREEN = "\x1b[H\x1b[2J"

# Useful compiled regex (SGR and cursor sequences, incl. private '?' params)
ANSI_REGEX = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


# ---- Utilities --------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def supports_color(stream: Any) -> bool:
    """
    True if escapes should be emitted to `stream`.

    Honors NO_COLOR (https://no-color.org) and TERM=dumb.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except (OSError, ValueError):
        return False


# ---- High-level helpers -----------------------------------------------------


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more SGR styles/keys from ANSI (e.g., 'red', 'bold').
    Always auto-resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text
