#!/usr/bin/env python3
# bootverify/boot/__init__.py
from __future__ import annotations
"""
Boot verification package.

Exports:
- Sequencer: runs a plan with Linux-style pending / ✓ / ✗ status lines.
- Check, Section, Criticality: the plan model.
- RunResult, TerminalAction: what the run decided.
- default_plan / load_plan: compiled-in and TOML plans.
"""

from .model import (
    ActionKind,
    Check,
    CheckResult,
    Criticality,
    RunResult,
    Section,
    TerminalAction,
    REASON_CRITICAL,
    REASON_NO_TARGET,
)
from .plan import default_plan, load_plan, parse_plan, resolve_plan
from .sequencer import Sequencer

__all__ = [
    "ActionKind",
    "Check",
    "CheckResult",
    "Criticality",
    "RunResult",
    "Section",
    "TerminalAction",
    "REASON_CRITICAL",
    "REASON_NO_TARGET",
    "default_plan",
    "load_plan",
    "parse_plan",
    "resolve_plan",
    "Sequencer",
]
