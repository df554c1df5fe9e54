#!/usr/bin/env python3
# bootverify/host/__init__.py
from __future__ import annotations
"""
Host collaborators: probe execution, service manager, terminal ownership.
"""

from .probe import ProbeOutcome, ProbeRunner, ProbeStatus
from .services import (
    InMemoryServiceManager,
    ServiceManager,
    ServiceState,
    SystemdServiceManager,
)
from .sysinfo import HostInfo, get_host_info
from .terminal import TerminalSession

__all__ = [
    "ProbeOutcome",
    "ProbeRunner",
    "ProbeStatus",
    "ServiceManager",
    "SystemdServiceManager",
    "InMemoryServiceManager",
    "ServiceState",
    "HostInfo",
    "get_host_info",
    "TerminalSession",
]
