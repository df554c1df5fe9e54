#!/usr/bin/env python3
# bootverify/ui/static/status.py
from __future__ import annotations

"""
Live status display for the verification run.

Every check gets exactly one line: it is printed once as pending and then
rewritten in place (cursor to previous line, clear, rewrite) with the final
symbol, so the display never grows by more than one line per check.
"""

import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TextIO

from bootverify.ui.animated import Countdown
from bootverify.ui.static.banner import format_logo_box, format_title_box
from bootverify.ui.utils import (
    CLEAR_LINE,
    CLEAR_SCREEN,
    CURSOR_PREV_LINE,
    center,
    colorize,
    get_terminal_columns,
    print_line,
    supports_color,
    truncate,
)

SYM_CHECK = "✓"
SYM_FAIL = "✗"
SYM_WAIT = "◌"

TROUBLESHOOTING_HINTS: Sequence[str] = (
    "Check system logs: journalctl -xb",
    "Verify service status: systemctl status",
)


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable display settings, built once per run."""
    columns: int = 80
    color: bool = True
    desc_width: int = 50
    clear_screen: bool = False

    @classmethod
    def detect(cls, stream: TextIO, *, color: bool = True) -> "RenderConfig":
        tty = supports_color(stream)
        return cls(
            columns=get_terminal_columns(),
            color=color and tty,
            clear_screen=tty,
        )


class StatusRenderer:
    """Draws header, sections, status lines, banners and the countdown."""

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        stream: TextIO = sys.stdout,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or RenderConfig.detect(stream)
        self.stream = stream
        self._sleep = sleep
        self.lines_written = 0

    # ---- primitives ---------------------------------------------------------

    def _style(self, text: str, *styles: str) -> str:
        return colorize(text, *styles) if self.config.color else text

    def _emit(self, text: str = "") -> None:
        print_line(text, file=self.stream)
        self.lines_written += 1

    def _status_text(self, description: str, styles: Sequence[str], symbol: str) -> str:
        width = self.config.desc_width
        desc = truncate(description, width)
        return f"  {desc:<{width}} {self._style(f'[{symbol}]', *styles)}"

    def blank(self) -> None:
        self._emit()

    # ---- header / sections --------------------------------------------------

    def header(self, hostname: str, kernel: str, uptime_min: int) -> None:
        if self.config.clear_screen:
            self.stream.write(CLEAR_SCREEN)
        self._emit()
        for line in format_logo_box():
            self._emit(self._style(center(line, self.config.columns, len(line)), "cyan", "bold"))
        self._emit()
        self._emit(f"  {self._style('Hostname:', 'dim')} {hostname}")
        self._emit(f"  {self._style('Kernel:', 'dim')}   {kernel}")
        self._emit(f"  {self._style('Uptime:', 'dim')}   {uptime_min}m")
        self._emit()

    def section(self, title: str) -> None:
        self._emit(self._style(f"━━━ {title} ━━━", "bold", "blue"))
        self._emit()

    # ---- check lines --------------------------------------------------------

    def pending(self, description: str) -> None:
        self._emit(self._status_text(description, ("yellow", "bold"), SYM_WAIT))

    def resolve(self, description: str, ok: bool) -> None:
        """Rewrite the last pending line in place; adds no new line."""
        if ok:
            text = self._status_text(description, ("green", "bold"), SYM_CHECK)
        else:
            text = self._status_text(description, ("red", "bold"), SYM_FAIL)
        self.stream.write(CURSOR_PREV_LINE + CLEAR_LINE + text + "\n")
        self.stream.flush()

    def failed(self, description: str) -> None:
        """Print a standalone failure line (no pending line precedes it)."""
        self._emit(self._status_text(description, ("red", "bold"), SYM_FAIL))

    # ---- banners ------------------------------------------------------------

    def _banner(self, title: str, *styles: str) -> None:
        for line in format_title_box(title):
            self._emit(self._style(line, *styles))

    def critical_banner(self, description: str, hints: Sequence[str] = TROUBLESHOOTING_HINTS) -> None:
        self._emit()
        self._banner("CRITICAL VERIFICATION FAILURE", "red", "bold")
        self._emit()
        self._emit(f"{self._style('Failed check:', 'red')} {description}")
        if hints:
            self._emit()
            self._emit(self._style("Troubleshooting:", "yellow"))
            for hint in hints:
                self._emit(f"  • {hint}")
        self._emit()

    def success_banner(self) -> None:
        self._emit()
        self._banner("ALL VERIFICATIONS PASSED", "green", "bold")
        self._emit()

    def no_target_banner(self) -> None:
        self._emit()
        self._banner("NO DISPLAY MANAGER DETECTED", "yellow", "bold")
        self._emit()

    def warning(self, text: str) -> None:
        self._emit(self._style(text, "yellow"))

    def note(self, text: str) -> None:
        self._emit(self._style(text, "dim"))

    # ---- timing -------------------------------------------------------------

    def countdown(self, seconds: int, label: str) -> None:
        self.note(label)
        counter = Countdown(seconds, file=self.stream, color=self.config.color, sleep=self._sleep)
        counter.run()
        if counter.seconds:
            self.lines_written += 1

    def pause(self, seconds: float) -> None:
        if seconds > 0:
            self._sleep(seconds)
