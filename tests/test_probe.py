"""Tests for out-of-process probe execution."""

from __future__ import annotations

import time

from bootverify.host import ProbeRunner, ProbeStatus


class TestProbeRunner:
    def test_zero_exit_passes(self):
        outcome = ProbeRunner().run("true", timeout=5)
        assert outcome.status is ProbeStatus.PASSED
        assert outcome.ok
        assert outcome.returncode == 0

    def test_nonzero_exit_fails(self):
        outcome = ProbeRunner().run("exit 3", timeout=5)
        assert outcome.status is ProbeStatus.FAILED
        assert not outcome.ok
        assert outcome.returncode == 3

    def test_argument_list_runs_without_shell(self):
        outcome = ProbeRunner().run(["test", "-d", "/"], timeout=5)
        assert outcome.ok

    def test_stderr_is_captured(self):
        outcome = ProbeRunner().run("echo boom >&2; exit 1", timeout=5)
        assert outcome.stderr == "boom"

    def test_sleep_past_timeout_is_failure_not_hang(self):
        start = time.monotonic()
        outcome = ProbeRunner().run("sleep 30", timeout=0.3)
        elapsed = time.monotonic() - start

        assert outcome.status is ProbeStatus.TIMED_OUT
        assert outcome.timed_out
        assert not outcome.ok
        assert elapsed < 5

    def test_timeout_kills_background_children(self):
        start = time.monotonic()
        outcome = ProbeRunner().run("sleep 30 & sleep 30; wait", timeout=0.3)

        assert outcome.timed_out
        assert time.monotonic() - start < 5

    def test_missing_executable_is_error(self):
        outcome = ProbeRunner().run(["/nonexistent/probe-binary"], timeout=5)
        assert outcome.status is ProbeStatus.ERROR
        assert not outcome.ok
        assert outcome.returncode == 127

    def test_detached_descendant_does_not_delay_exit_status(self):
        start = time.monotonic()
        outcome = ProbeRunner().run("setsid sleep 6 & exit 0", timeout=0.5)
        elapsed = time.monotonic() - start

        assert outcome.status is ProbeStatus.PASSED
        assert elapsed < 2
