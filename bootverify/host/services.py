#!/usr/bin/env python3
# bootverify/host/services.py
from __future__ import annotations

"""
Service-manager capability.

The verifier only needs three operations from the host's service manager:
is_enabled, is_active and start. Production code talks to systemd through
`systemctl`; tests use InMemoryServiceManager.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from bootverify.errors import ServiceStartError
from bootverify.host.probe import ProbeRunner

log = logging.getLogger(__name__)

SYSTEMCTL_TIMEOUT = 5.0
START_TIMEOUT = 90.0


class ServiceManager(Protocol):
    """Protocol for a host service manager."""

    def is_enabled(self, name: str) -> bool:  # pragma: no cover - signature only
        ...

    def is_active(self, name: str) -> bool:  # pragma: no cover - signature only
        ...

    def start(self, name: str) -> None:  # pragma: no cover - signature only
        ...


class SystemdServiceManager:
    """ServiceManager backed by `systemctl`."""

    def __init__(self, runner: Optional[ProbeRunner] = None, *, systemctl: str = "systemctl") -> None:
        self.runner = runner or ProbeRunner()
        self.systemctl = systemctl

    def is_enabled(self, name: str) -> bool:
        return self.runner.run([self.systemctl, "is-enabled", "--quiet", name], SYSTEMCTL_TIMEOUT).ok

    def is_active(self, name: str) -> bool:
        return self.runner.run([self.systemctl, "is-active", "--quiet", name], SYSTEMCTL_TIMEOUT).ok

    def start(self, name: str) -> None:
        log.info("Starting %s", name)
        outcome = self.runner.run([self.systemctl, "start", name], START_TIMEOUT)
        if not outcome.ok:
            raise ServiceStartError(name, outcome.stderr or outcome.status.value)


@dataclass(slots=True)
class ServiceState:
    enabled: bool = False
    active: bool = False


class InMemoryServiceManager:
    """
    Deterministic ServiceManager for tests and dry runs.

    Unknown names are neither enabled nor active. start() marks the
    service active and records the call in `started`.
    """

    def __init__(self, states: Optional[Mapping[str, ServiceState]] = None) -> None:
        self.states: dict[str, ServiceState] = dict(states or {})
        self.started: list[str] = []
        self.queried: list[str] = []

    def is_enabled(self, name: str) -> bool:
        self.queried.append(name)
        return self.states.get(name, ServiceState()).enabled

    def is_active(self, name: str) -> bool:
        return self.states.get(name, ServiceState()).active

    def start(self, name: str) -> None:
        state = self.states.get(name)
        if state is None or not state.enabled:
            raise ServiceStartError(name, "unit not enabled")
        state.active = True
        self.started.append(name)
