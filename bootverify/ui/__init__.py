#!/usr/bin/env python3
# bootverify/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .utils import (
    ANSI,
    CLEAR_LINE,
    CURSOR_HIDE,
    CURSOR_PREV_LINE,
    CURSOR_SHOW,
    strip_ansi,
    supports_color,
    colorize,
    center,
    print_line,
    get_terminal_columns,
    truncate,
)
from .animated import Countdown
from .static import (
    SYM_CHECK,
    SYM_FAIL,
    SYM_WAIT,
    RenderConfig,
    StatusRenderer,
    format_box,
    init_logger,
    ColorizingStreamHandler,
    PlainFormatter,
)

__all__ = [
    "ANSI",
    "CLEAR_LINE",
    "CURSOR_HIDE",
    "CURSOR_PREV_LINE",
    "CURSOR_SHOW",
    "strip_ansi",
    "supports_color",
    "colorize",
    "center",
    "print_line",
    "get_terminal_columns",
    "truncate",
    "Countdown",
    "SYM_CHECK",
    "SYM_FAIL",
    "SYM_WAIT",
    "RenderConfig",
    "StatusRenderer",
    "format_box",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
