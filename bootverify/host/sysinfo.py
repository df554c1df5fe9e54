#!/usr/bin/env python3
# bootverify/host/sysinfo.py
from __future__ import annotations

"""
Host facts shown in the verifier header.

- Zero external dependencies.
- Every probe degrades to "unknown" / 0 instead of raising.
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional
import platform
import socket

PROC_UPTIME = Path("/proc/uptime")


@dataclass(frozen=True, slots=True)
class HostInfo:
    hostname: str
    kernel: str
    uptime_sec: int

    @property
    def uptime_min(self) -> int:
        return self.uptime_sec // 60

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def _safe_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _read_uptime(path: Path = PROC_UPTIME) -> int:
    """Seconds since boot from /proc/uptime; 0 if unavailable."""
    try:
        first = path.read_text(encoding="ascii").split()[0]
    except (OSError, IndexError):
        return 0
    return _safe_int(first.split(".")[0]) or 0


def get_host_info(*, uptime_path: Path = PROC_UPTIME) -> HostInfo:
    return HostInfo(
        hostname=socket.gethostname() or "unknown",
        kernel=platform.release() or "unknown",
        uptime_sec=_read_uptime(uptime_path),
    )
