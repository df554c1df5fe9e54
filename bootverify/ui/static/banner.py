#!/usr/bin/env python3
# bootverify/ui/static/banner.py
from __future__ import annotations

from typing import List, Sequence

from bootverify.ui.utils import strip_ansi

BOX_INNER_WIDTH = 48

LOGO: Sequence[str] = (
    "█▀ █ █ █ █▀▄▀█ █▀▀ █▀█ █▀█ █▄▀",
    "▄█ █▀█ █ █ ▀ █ █▀  █▄█ █▀▄ █ █",
)


def format_box(
    lines: Sequence[str],
    *,
    inner_width: int = BOX_INNER_WIDTH,
    indent: int = 5,
    centered: bool = False,
) -> List[str]:
    """Return a double-line box around `lines` (ANSI-safe width calculation)."""
    out = ["╔" + "═" * inner_width + "╗"]
    for line in lines:
        visible = len(strip_ansi(line))
        if centered:
            left = max(0, (inner_width - visible) // 2)
        else:
            left = indent
        right = max(0, inner_width - left - visible)
        out.append("║" + " " * left + line + " " * right + "║")
    out.append("╚" + "═" * inner_width + "╝")
    return out


def format_title_box(title: str) -> List[str]:
    """Three-line banner used for pass / fail / warning announcements."""
    return format_box([title])


def format_logo_box(subtitle: str = "SYSTEM VERIFICATION SUITE") -> List[str]:
    return format_box(["", *LOGO, "", subtitle, ""], centered=True)
