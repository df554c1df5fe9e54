#!/usr/bin/env python3
# bootverify/boot/sequencer.py
from __future__ import annotations
"""
Boot verification sequencer.

Runs an ordered plan of checks with per-check timeout and criticality,
renders live status, and decides the terminal action:
- a critical failure stops the run, waits for acknowledgement, and asks for
  a fallback shell;
- otherwise the first enabled target service (display manager) is checked
  and handed off to, or the run falls back to a login shell.

The sequencer never starts services or execs shells itself; the caller
performs the returned TerminalAction.
"""

import contextlib
import logging
from typing import Callable, ContextManager, Optional, Sequence, Union

from bootverify.boot.model import (
    REASON_CRITICAL,
    REASON_NO_TARGET,
    Check,
    CheckResult,
    Criticality,
    RunResult,
    Section,
    TerminalAction,
)
from bootverify.config import VerifierConfig
from bootverify.errors import NoTargetFound, ProbeFailure
from bootverify.host import HostInfo, ProbeRunner, ServiceManager, TerminalSession
from bootverify.interface import DEFAULT_MESSAGE, Acknowledge
from bootverify.ui import StatusRenderer

log = logging.getLogger(__name__)

TARGET_SECTION = "Display Manager"
TARGET_LABEL = "Display manager"

Command = Union[str, Sequence[str]]


def systemctl_status(name: str) -> Command:
    return ("systemctl", "status", name)


class Sequencer:
    """
    Orchestrates one verification run.

    Args:
        runner: executes probe commands under a timeout.
        services: host service manager used for target discovery.
        renderer: status display.
        acknowledge: blocks until the operator confirms a critical failure.
        config: timing, candidates and target-check criticality.
        terminal: optional TerminalSession owned for the duration of run().
        host_info: optional provider for the header (hostname/kernel/uptime).
        target_command: builds the probe command for the target check.
    """

    def __init__(
        self,
        runner: ProbeRunner,
        services: ServiceManager,
        renderer: StatusRenderer,
        acknowledge: Acknowledge,
        config: Optional[VerifierConfig] = None,
        *,
        terminal: Optional[TerminalSession] = None,
        host_info: Optional[Callable[[], HostInfo]] = None,
        target_command: Callable[[str], Command] = systemctl_status,
    ) -> None:
        self.runner = runner
        self.services = services
        self.renderer = renderer
        self.acknowledge = acknowledge
        self.config = config or VerifierConfig()
        self.terminal = terminal
        self.host_info = host_info
        self.target_command = target_command

    # ---- public API ---------------------------------------------------------

    def run(self, plan: Sequence[Section]) -> RunResult:
        result = RunResult(terminal_action=TerminalAction.proceed())
        scope: ContextManager = self.terminal if self.terminal is not None else contextlib.nullcontext()
        with scope:
            self._draw_header()
            try:
                for section in plan:
                    self.renderer.section(section.title)
                    for check in section.checks:
                        self._execute(check, result)
                    self.renderer.blank()

                if self.config.handoff_enabled:
                    self._handoff(result)
            except ProbeFailure as failure:
                self._critical_failure(failure, result)

        log.info(
            "Run finished: %d checks, %d advisory failures, action=%s",
            result.total_checks, result.failed_advisory, result.terminal_action,
        )
        return result

    def discover_target(self, *, strict: bool = False) -> Optional[str]:
        """First enabled candidate in priority order, or None."""
        for name in self.config.target_candidates:
            if self.services.is_enabled(name):
                log.debug("Target service detected: %s", name)
                return name
        if strict:
            raise NoTargetFound(self.config.target_candidates)
        return None

    # ---- steps --------------------------------------------------------------

    def _draw_header(self) -> None:
        if self.host_info is None:
            return
        info = self.host_info()
        self.renderer.header(info.hostname, info.kernel, info.uptime_min)

    def _execute(self, check: Check, result: RunResult) -> None:
        """Run one check; raises ProbeFailure if a critical check fails."""
        self.renderer.pending(check.description)
        outcome = self.runner.run(check.command, check.timeout)
        result.results.append(CheckResult(check, outcome))
        self.renderer.resolve(check.description, outcome.ok)
        # Log only after resolve(): the pending line must stay directly above the cursor
        log.debug(
            "%s %s -> %s rc=%s in %.2fs",
            "PASS" if outcome.ok else "FAIL", check.description,
            outcome.status.value, outcome.returncode, outcome.duration_sec,
        )

        if outcome.ok:
            return
        if check.is_critical:
            raise ProbeFailure(check, outcome)

        result.failed_advisory += 1
        log.warning(
            "Non-critical check failed: %s (%s)",
            check.description, outcome.stderr or outcome.status.value,
        )

    def _critical_failure(self, failure: ProbeFailure, result: RunResult) -> None:
        log.error("Critical check failed: %s", failure)
        self.renderer.critical_banner(failure.check.description)
        suspend = self.terminal.suspended() if self.terminal is not None else contextlib.nullcontext()
        with suspend:
            try:
                self.acknowledge(DEFAULT_MESSAGE)
            except (EOFError, KeyboardInterrupt):
                # Ctrl-C or a closed console still ends in the fallback shell
                log.warning("Acknowledgement interrupted; continuing to fallback shell")
        result.failed_check = failure.check
        result.terminal_action = TerminalAction.fallback_shell(REASON_CRITICAL)

    def _handoff(self, result: RunResult) -> None:
        self.renderer.section(TARGET_SECTION)
        target = self.discover_target()

        if target is None:
            log.warning("No target service among %s", ", ".join(self.config.target_candidates))
            self.renderer.failed(TARGET_LABEL)
            self.renderer.no_target_banner()
            self.renderer.warning("Starting console login...")
            self.renderer.pause(self.config.no_target_delay)
            result.terminal_action = TerminalAction.fallback_shell(REASON_NO_TARGET)
            return

        result.target = target
        criticality = (
            Criticality.CRITICAL if self.config.target_check_critical else Criticality.ADVISORY
        )
        self._execute(
            Check(
                f"{TARGET_LABEL} ({target})",
                self.target_command(target),
                criticality,
                self.config.probe_timeout,
            ),
            result,
        )

        self.renderer.success_banner()
        if result.failed_advisory > 0:
            self.renderer.warning(
                f"Warning: {result.failed_advisory} non-critical check(s) failed"
            )
            self.renderer.blank()
        self.renderer.countdown(self.config.countdown_seconds, f"Starting {target} in...")
        result.terminal_action = TerminalAction.handoff(target)
