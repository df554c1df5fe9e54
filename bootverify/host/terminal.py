#!/usr/bin/env python3
# bootverify/host/terminal.py
from __future__ import annotations

"""
Scoped ownership of the controlling terminal.

TerminalSession turns echo off and hides the cursor for the duration of a
run and guarantees both are restored exactly once on every exit path:
normal return, exceptions, KeyboardInterrupt and SIGTERM/SIGHUP (which are
converted into InterruptedRun so that the `with` block unwinds).
"""

import contextlib
import logging
import os
import signal
import sys
import termios
import threading
from typing import Any, Iterator, Optional, Sequence, TextIO

from bootverify.errors import InterruptedRun
from bootverify.ui import CURSOR_HIDE, CURSOR_SHOW

log = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def _tty_fd(stream: Any) -> Optional[int]:
    """Return the file descriptor behind `stream` if it is a TTY."""
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None
    return fd if os.isatty(fd) else None


def _raise_interrupted(signum: int, _frame: Any) -> None:
    raise InterruptedRun(signum)


class TerminalSession:
    """
    Context manager owning terminal mode for one verification run.

    Usage:
        with TerminalSession(sys.stdout) as term:
            ...
            with term.suspended():
                input()
    """

    def __init__(
        self,
        stream: TextIO = sys.stdout,
        *,
        stdin: Any = None,
        hide_cursor: bool = True,
        disable_echo: bool = True,
        signals: Sequence[int] = DEFAULT_SIGNALS,
    ) -> None:
        self.stream = stream
        self.stdin = stdin if stdin is not None else sys.stdin
        self.hide_cursor = hide_cursor
        self.disable_echo = disable_echo
        self.signals = tuple(signals)
        self.restorations = 0
        self._active = False
        self._fd: Optional[int] = None
        self._saved_attrs: Optional[list] = None
        self._saved_handlers: dict[int, Any] = {}

    # ---- context manager ----------------------------------------------------

    def __enter__(self) -> "TerminalSession":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    @property
    def active(self) -> bool:
        return self._active

    # ---- acquire / release --------------------------------------------------

    def acquire(self) -> None:
        if self._active:
            return
        self._install_signal_handlers()
        if self.disable_echo:
            self._fd = _tty_fd(self.stdin)
            if self._fd is not None:
                self._saved_attrs = termios.tcgetattr(self._fd)
        self._active = True
        self._apply_mode()

    def restore(self) -> None:
        """Put the terminal back the way it was. Safe to call repeatedly."""
        if not self._active:
            return
        self._active = False
        try:
            self._release_mode()
        finally:
            self._restore_signal_handlers()
            self.restorations += 1

    @contextlib.contextmanager
    def suspended(self) -> Iterator[None]:
        """Temporarily give the operator a normal terminal (echo, cursor)."""
        if not self._active:
            yield
            return
        self._release_mode()
        try:
            yield
        finally:
            self._apply_mode()

    # ---- internals ----------------------------------------------------------

    def _apply_mode(self) -> None:
        if self._fd is not None and self._saved_attrs is not None:
            attrs = termios.tcgetattr(self._fd)
            attrs[3] &= ~termios.ECHO  # lflag
            termios.tcsetattr(self._fd, termios.TCSADRAIN, attrs)
        if self.hide_cursor:
            self._write(CURSOR_HIDE)

    def _release_mode(self) -> None:
        try:
            if self._fd is not None and self._saved_attrs is not None:
                termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
        except termios.error as exc:
            log.warning("Could not restore terminal attributes: %s", exc)
        finally:
            if self.hide_cursor:
                self._write(CURSOR_SHOW)

    def _write(self, seq: str) -> None:
        try:
            self.stream.write(seq)
            self.stream.flush()
        except (OSError, ValueError):
            pass

    def _install_signal_handlers(self) -> None:
        # signal.signal only works from the main thread
        if threading.current_thread() is not threading.main_thread():
            return
        for signum in self.signals:
            self._saved_handlers[signum] = signal.signal(signum, _raise_interrupted)

    def _restore_signal_handlers(self) -> None:
        for signum, handler in self._saved_handlers.items():
            signal.signal(signum, handler)
        self._saved_handlers.clear()
