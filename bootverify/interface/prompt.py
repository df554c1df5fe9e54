#!/usr/bin/env python3
# bootverify/interface/prompt.py
from __future__ import annotations

"""
Blocking operator acknowledgement.

This is the single point in a run that waits for a human. prompt_toolkit
owns the terminal while it reads, so echo/cursor state set by the
verifier must be suspended around the call.
"""

from typing import Callable

from prompt_toolkit import prompt
from prompt_toolkit.formatted_text import ANSI as PTANSI

from bootverify.ui import colorize

Acknowledge = Callable[[str], None]

DEFAULT_MESSAGE = "Press Enter to drop to emergency shell..."


def wait_for_acknowledgement(message: str = DEFAULT_MESSAGE) -> None:
    """Block until the operator presses Enter. EOF counts as acknowledgement."""
    try:
        prompt(PTANSI(colorize(message, "dim") + " "), is_password=True)
    except EOFError:
        pass
