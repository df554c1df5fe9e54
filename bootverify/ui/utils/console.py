#!/usr/bin/env python3
# bootverify/ui/utils/console.py
from __future__ import annotations

import shutil
import sys
from typing import TextIO


def print_line(text: str = "", *, file: TextIO = sys.stdout, flush: bool = True) -> None:
    """Single-line print; flushes by default so status lines appear immediately."""
    file.write(f"{text}\n")
    if flush:
        file.flush()


def get_terminal_columns(default: int = 80) -> int:
    """Return current terminal column width with a sensible default."""
    try:
        return shutil.get_terminal_size((default, 24)).columns
    except Exception:
        return default


def center(text: str, width: int, visible_len: int | None = None) -> str:
    """Left-pad `text` so it sits centered in `width` columns."""
    length = len(text) if visible_len is None else visible_len
    padding = max(0, (width - length) // 2)
    return " " * padding + text


def truncate(text: str, max_len: int) -> str:
    """Shorten `text` to `max_len` characters, ending with '...' if cut."""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."
