#!/usr/bin/env python3
# bootverify/boot/model.py
from __future__ import annotations

"""
Verification data structures.

This module defines:
- Criticality: whether a failing check halts the run.
- Check / Section: the static, ordered verification plan.
- TerminalAction: what the caller should do once the run is over.
- CheckResult / RunResult: the aggregate outcome of one run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union

from bootverify.host.probe import ProbeOutcome

DEFAULT_TIMEOUT = 5.0


class Criticality(str, Enum):
    CRITICAL = "critical"
    ADVISORY = "advisory"


@dataclass(frozen=True, slots=True)
class Check:
    """
    One health probe.

    Attributes:
        description: Label shown on the status line.
        command: Shell string (run via /bin/sh -c) or argument sequence.
        criticality: CRITICAL halts the run on failure, ADVISORY only counts.
        timeout: Seconds before the probe is killed and counted as failed.
    """
    description: str
    command: Union[str, Sequence[str]]
    criticality: Criticality = Criticality.CRITICAL
    timeout: float = DEFAULT_TIMEOUT

    @property
    def is_critical(self) -> bool:
        return self.criticality is Criticality.CRITICAL


@dataclass(frozen=True, slots=True)
class Section:
    """Named group of checks; affects display only."""
    title: str
    checks: Sequence[Check] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "checks", tuple(self.checks))


class ActionKind(str, Enum):
    HANDOFF = "handoff"
    FALLBACK_SHELL = "fallback-shell"
    CONTINUE = "continue"


# Reasons attached to FALLBACK_SHELL actions
REASON_CRITICAL = "critical-failure"
REASON_NO_TARGET = "no-target"


@dataclass(frozen=True, slots=True)
class TerminalAction:
    kind: ActionKind
    service: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def handoff(cls, service: str) -> "TerminalAction":
        return cls(ActionKind.HANDOFF, service=service)

    @classmethod
    def fallback_shell(cls, reason: str) -> "TerminalAction":
        return cls(ActionKind.FALLBACK_SHELL, reason=reason)

    @classmethod
    def proceed(cls) -> "TerminalAction":
        return cls(ActionKind.CONTINUE)

    def __str__(self) -> str:
        if self.kind is ActionKind.HANDOFF:
            return f"handoff:{self.service}"
        if self.kind is ActionKind.FALLBACK_SHELL:
            return f"fallback-shell:{self.reason}"
        return "continue"


@dataclass(frozen=True, slots=True)
class CheckResult:
    check: Check
    outcome: ProbeOutcome

    @property
    def ok(self) -> bool:
        return self.outcome.ok


@dataclass(slots=True)
class RunResult:
    """
    Aggregate outcome of a run.

    total_checks counts every check attempted, including the target check.
    failed_check is set only when a critical check halted the run.
    """
    terminal_action: TerminalAction
    results: list[CheckResult] = field(default_factory=list)
    failed_advisory: int = 0
    failed_check: Optional[Check] = None
    target: Optional[str] = None

    @property
    def total_checks(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.ok)
