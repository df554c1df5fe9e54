#!/usr/bin/env python3
# bootverify/ui/utils/__init__.py
from __future__ import annotations
from .ansi import (
    ANSI,
    ANSI_REGEX,
    CLEAR_LINE,
    CLEAR_SCREEN,
    CURSOR_HIDE,
    CURSOR_PREV_LINE,
    CURSOR_SHOW,
    colorize,
    strip_ansi,
    supports_color,
)
from .console import center, get_terminal_columns, print_line, truncate

__all__ = [
    "ANSI",
    "ANSI_REGEX",
    "CLEAR_LINE",
    "CLEAR_SCREEN",
    "CURSOR_HIDE",
    "CURSOR_PREV_LINE",
    "CURSOR_SHOW",
    "colorize",
    "strip_ansi",
    "supports_color",
    "center",
    "get_terminal_columns",
    "print_line",
    "truncate",
]
