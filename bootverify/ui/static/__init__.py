#!/usr/bin/env python3
# bootverify/ui/static/__init__.py
from __future__ import annotations
from .banner import format_box, format_logo_box, format_title_box
from .logging import (
    init_logger,
    ColorizingStreamHandler,
    PlainFormatter,
)
from .status import (
    SYM_CHECK,
    SYM_FAIL,
    SYM_WAIT,
    RenderConfig,
    StatusRenderer,
)

__all__ = [
    "format_box",
    "format_logo_box",
    "format_title_box",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
    "SYM_CHECK",
    "SYM_FAIL",
    "SYM_WAIT",
    "RenderConfig",
    "StatusRenderer",
]
