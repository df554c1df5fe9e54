"""Tests for terminal ownership and cleanup."""

from __future__ import annotations

import io
import os
import signal
import time

import pytest

from bootverify.errors import InterruptedRun
from bootverify.host import TerminalSession
from bootverify.ui import CURSOR_HIDE, CURSOR_SHOW


def session(stream: io.StringIO) -> TerminalSession:
    # StringIO stdin is not a TTY: echo handling is skipped
    return TerminalSession(stream, stdin=io.StringIO())


class TestTerminalSession:
    def test_cursor_hidden_then_restored(self):
        out = io.StringIO()
        with session(out) as term:
            assert term.active
            assert out.getvalue() == CURSOR_HIDE
        assert out.getvalue() == CURSOR_HIDE + CURSOR_SHOW
        assert term.restorations == 1

    def test_restore_is_idempotent(self):
        out = io.StringIO()
        with session(out) as term:
            term.restore()
            term.restore()
        assert out.getvalue().count(CURSOR_SHOW) == 1
        assert term.restorations == 1

    def test_restored_on_exception(self):
        out = io.StringIO()
        term = session(out)
        with pytest.raises(RuntimeError):
            with term:
                raise RuntimeError("boom")
        assert out.getvalue().endswith(CURSOR_SHOW)
        assert term.restorations == 1

    def test_sigterm_becomes_interrupted_run(self):
        out = io.StringIO()
        previous = signal.getsignal(signal.SIGTERM)
        term = session(out)
        with pytest.raises(InterruptedRun) as info:
            with term:
                os.kill(os.getpid(), signal.SIGTERM)
                time.sleep(5)

        assert info.value.signum == signal.SIGTERM
        assert term.restorations == 1
        assert out.getvalue().endswith(CURSOR_SHOW)
        assert signal.getsignal(signal.SIGTERM) == previous

    def test_suspended_shows_cursor_temporarily(self):
        out = io.StringIO()
        with session(out) as term:
            with term.suspended():
                assert out.getvalue() == CURSOR_HIDE + CURSOR_SHOW
            assert out.getvalue() == CURSOR_HIDE + CURSOR_SHOW + CURSOR_HIDE
        assert term.restorations == 1

    def test_signal_handlers_restored(self):
        previous = signal.getsignal(signal.SIGHUP)
        with session(io.StringIO()):
            assert signal.getsignal(signal.SIGHUP) != previous
        assert signal.getsignal(signal.SIGHUP) == previous
