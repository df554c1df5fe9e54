"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
from typing import Sequence, Union

import pytest

from bootverify.config import VerifierConfig
from bootverify.host import InMemoryServiceManager, ProbeOutcome, ProbeStatus, ServiceState
from bootverify.ui import RenderConfig, StatusRenderer

Command = Union[str, Sequence[str]]


def _key(command: Command) -> str:
    return command if isinstance(command, str) else " ".join(command)


class FakeRunner:
    """Probe runner with scripted outcomes; unknown commands pass."""

    def __init__(self, outcomes: dict[str, ProbeStatus] | None = None) -> None:
        self.outcomes = dict(outcomes or {})
        self.calls: list[tuple[str, float]] = []

    def run(self, command: Command, timeout: float | None) -> ProbeOutcome:
        key = _key(command)
        self.calls.append((key, timeout))
        status = self.outcomes.get(key, ProbeStatus.PASSED)
        rc = 0 if status is ProbeStatus.PASSED else 1
        return ProbeOutcome(status, rc, 0.0)

    @property
    def commands(self) -> list[str]:
        return [c for c, _ in self.calls]


class Acknowledger:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


class Sleeper:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def sleeper() -> Sleeper:
    return Sleeper()


@pytest.fixture
def renderer(stream: io.StringIO, sleeper: Sleeper) -> StatusRenderer:
    return StatusRenderer(RenderConfig(color=False), stream, sleep=sleeper)


@pytest.fixture
def acknowledge() -> Acknowledger:
    return Acknowledger()


@pytest.fixture
def config() -> VerifierConfig:
    return VerifierConfig(countdown_seconds=3, no_target_delay=2.0)


def services_with(*enabled: str) -> InMemoryServiceManager:
    return InMemoryServiceManager({name: ServiceState(enabled=True) for name in enabled})
