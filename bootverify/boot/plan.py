#!/usr/bin/env python3
# bootverify/boot/plan.py
from __future__ import annotations

"""
Verification plans.

default_plan() is the compiled-in kiosk plan. load_plan() reads the same
structure from TOML:

    [[section]]
    title = "Core System"

      [[section.check]]
      description = "Root filesystem integrity"
      command = "mountpoint -q /"
      criticality = "critical"     # or: critical = true
      timeout = 5
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union
import tomllib

from bootverify.boot.model import DEFAULT_TIMEOUT, Check, Criticality, Section
from bootverify.errors import ConfigError

Plan = Sequence[Section]


def default_plan(timeout: float = DEFAULT_TIMEOUT) -> list[Section]:
    """Core system, network and privacy-service checks for the kiosk host."""
    critical, advisory = Criticality.CRITICAL, Criticality.ADVISORY
    return [
        Section("Core System", [
            Check("Root filesystem integrity", "mountpoint -q /", critical, timeout),
            Check(
                "Shimfork components installed",
                "[ -d /usr/lib/shimfork ] && [ -x /usr/bin/shimfork ]",
                critical, timeout,
            ),
            Check(
                "System time synchronized",
                "timedatectl status | grep -q 'synchronized: yes'",
                advisory, timeout,
            ),
        ]),
        Section("Network Services", [
            Check(
                "NetworkManager service",
                "systemctl is-active NetworkManager || systemctl is-active network",
                critical, timeout,
            ),
            Check(
                "DNS resolution",
                "nslookup cloudflare.com >/dev/null 2>&1 || host cloudflare.com >/dev/null 2>&1",
                advisory, timeout,
            ),
            Check(
                "Internet connectivity",
                "ping -c1 -W3 1.1.1.1 || ping -c1 -W3 8.8.8.8",
                critical, timeout,
            ),
        ]),
        Section("Privacy & Security", [
            Check("Tor service", "systemctl is-active tor", critical, timeout),
            Check(
                "I2P service",
                "systemctl is-active i2p || systemctl is-active i2pd",
                critical, timeout,
            ),
        ]),
    ]


# ---------- TOML loading ----------

def _parse_criticality(where: str, raw: Mapping[str, Any]) -> Criticality:
    if "criticality" in raw:
        value = str(raw["criticality"]).strip().lower()
        try:
            return Criticality(value)
        except ValueError:
            raise ConfigError(
                f"{where}: criticality must be 'critical' or 'advisory', got {value!r}"
            ) from None
    critical = raw.get("critical", True)
    if not isinstance(critical, bool):
        raise ConfigError(f"{where}: critical must be true or false")
    return Criticality.CRITICAL if critical else Criticality.ADVISORY


def _parse_check(where: str, raw: Any, default_timeout: float) -> Check:
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: expected a table")
    description = raw.get("description")
    command = raw.get("command")
    if not isinstance(description, str) or not description.strip():
        raise ConfigError(f"{where}: missing description")
    if isinstance(command, list) and command and all(isinstance(a, str) for a in command):
        command = tuple(command)
    elif not isinstance(command, str) or not command.strip():
        raise ConfigError(f"{where}: missing command")

    timeout = raw.get("timeout", default_timeout)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"{where}: timeout must be a positive number")

    return Check(
        description=description,
        command=command,
        criticality=_parse_criticality(where, raw),
        timeout=float(timeout),
    )


def parse_plan(data: Mapping[str, Any], *, default_timeout: float = DEFAULT_TIMEOUT) -> list[Section]:
    sections = data.get("section")
    if not isinstance(sections, list) or not sections:
        raise ConfigError("plan must define at least one [[section]]")

    plan: list[Section] = []
    for s_idx, raw_section in enumerate(sections):
        if not isinstance(raw_section, dict):
            raise ConfigError(f"section[{s_idx}]: expected a table")
        title = raw_section.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ConfigError(f"section[{s_idx}]: missing title")
        checks = [
            _parse_check(f"{title}/check[{c_idx}]", raw_check, default_timeout)
            for c_idx, raw_check in enumerate(raw_section.get("check", []))
        ]
        plan.append(Section(title, checks))
    return plan


def load_plan(path: Union[str, Path], *, default_timeout: float = DEFAULT_TIMEOUT) -> list[Section]:
    """Read a plan from a TOML file; raises ConfigError on any problem."""
    p = Path(path)
    try:
        with p.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {p}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read plan {p}: {exc}") from exc
    return parse_plan(data, default_timeout=default_timeout)


def resolve_plan(plan_path: Optional[Path], *, default_timeout: float = DEFAULT_TIMEOUT) -> list[Section]:
    if plan_path is None:
        return default_plan(default_timeout)
    return load_plan(plan_path, default_timeout=default_timeout)
