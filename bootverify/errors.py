#!/usr/bin/env python3
# bootverify/errors.py
from __future__ import annotations

"""
Exception taxonomy for the verifier.

- ProbeFailure: a critical check failed (advisory failures never raise).
- NoTargetFound: strict target discovery found nothing.
- InterruptedRun: SIGTERM/SIGHUP delivered while the terminal was owned.
- ConfigError: invalid configuration or plan file.
- ServiceStartError: the handoff service could not be started.
"""

import signal
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from bootverify.boot.model import Check
    from bootverify.host.probe import ProbeOutcome


class VerifierError(Exception):
    """Base class for all verifier errors."""


class ProbeFailure(VerifierError):
    def __init__(self, check: "Check", outcome: "ProbeOutcome") -> None:
        self.check = check
        self.outcome = outcome
        super().__init__(
            f"{check.description}: {outcome.status.value}"
            f" (rc={outcome.returncode})"
        )

    @property
    def critical(self) -> bool:
        return self.check.is_critical


class NoTargetFound(VerifierError):
    def __init__(self, candidates: Sequence[str]) -> None:
        self.candidates = tuple(candidates)
        super().__init__(
            "No enabled target service among: " + ", ".join(self.candidates)
        )


class InterruptedRun(VerifierError):
    def __init__(self, signum: int) -> None:
        self.signum = signum
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        super().__init__(f"Interrupted by {name}")


class ConfigError(VerifierError, ValueError):
    """Invalid configuration value or plan definition."""


class ServiceStartError(VerifierError):
    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        msg = f"Failed to start {name}"
        super().__init__(f"{msg}: {detail}" if detail else msg)
