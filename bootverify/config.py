#!/usr/bin/env python3
# bootverify/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) One TOML file: explicit path, else /etc/bootverify/config.toml,
     else ./config.toml (first one that exists)
  3) Environment variables prefixed BOOTVERIFY_

Validation:
  - PROBE_TIMEOUT: float > 0
  - COUNTDOWN_SECONDS: int >= 0
  - NO_TARGET_DELAY: float >= 0
  - TARGET_CANDIDATES: non-empty list of names (list or comma/space string)
  - TARGET_CHECK_CRITICAL / HANDOFF_ENABLED / COLOR: bool
  - SHELL: non-empty str
  - LOG_LEVEL: one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH / PLAN_PATH: None or normalized path
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union
import os
import re
import tomllib

from bootverify.errors import ConfigError

ENV_PREFIX = "BOOTVERIFY_"
SYSTEM_CONFIG_PATH = Path("/etc/bootverify/config.toml")

# Display managers probed in priority order
DEFAULT_TARGET_CANDIDATES: tuple[str, ...] = (
    "gdm", "gdm3", "sddm", "lightdm", "lxdm", "xdm",
)

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "PROBE_TIMEOUT": 5.0,
    "COUNTDOWN_SECONDS": 3,
    "NO_TARGET_DELAY": 2.0,
    "TARGET_CANDIDATES": list(DEFAULT_TARGET_CANDIDATES),
    "TARGET_CHECK_CRITICAL": False,
    "HANDOFF_ENABLED": True,
    "SHELL": "/bin/bash",
    "LOG_FILE_PATH": None,
    "LOG_LEVEL": "WARNING",
    "PLAN_PATH": None,
    "COLOR": True,
}


# ---------- data model ----------

@dataclass(frozen=True)
class VerifierConfig:
    probe_timeout: float = DEFAULTS["PROBE_TIMEOUT"]
    countdown_seconds: int = DEFAULTS["COUNTDOWN_SECONDS"]
    no_target_delay: float = DEFAULTS["NO_TARGET_DELAY"]
    target_candidates: tuple[str, ...] = DEFAULT_TARGET_CANDIDATES
    target_check_critical: bool = DEFAULTS["TARGET_CHECK_CRITICAL"]
    handoff_enabled: bool = DEFAULTS["HANDOFF_ENABLED"]
    shell: str = DEFAULTS["SHELL"]
    log_file_path: Optional[Path] = None
    log_level: str = DEFAULTS["LOG_LEVEL"]
    plan_path: Optional[Path] = None
    color: bool = DEFAULTS["COLOR"]

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loading ----------

def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc


def _find_config_file(explicit: Optional[Path]) -> Optional[Path]:
    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError(f"Config file not found: {explicit}")
        return explicit
    for candidate in (SYSTEM_CONFIG_PATH, Path.cwd() / "config.toml"):
        if candidate.is_file():
            return candidate
    return None


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ConfigError(f"{key}: expected boolean, got {val!r}")


def _as_int(key: str, val: Any) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    try:
        return int(str(val).strip())
    except ValueError as exc:
        raise ConfigError(f"{key}: expected integer, got {val!r}") from exc


def _as_float(key: str, val: Any) -> float:
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return float(val)
    try:
        return float(str(val).strip())
    except ValueError as exc:
        raise ConfigError(f"{key}: expected number, got {val!r}") from exc


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


def _as_names(key: str, val: Any) -> tuple[str, ...]:
    if isinstance(val, str):
        items = [p for p in re.split(r"[,\s]+", val) if p]
    elif isinstance(val, (list, tuple)):
        items = [str(p).strip() for p in val if str(p).strip()]
    else:
        raise ConfigError(f"{key}: expected list of names, got {val!r}")
    if not items:
        raise ConfigError(f"{key}: must name at least one service")
    return tuple(items)


def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


# ---------- merge & validation ----------

def _merge_sources(
    config_path: Optional[Path],
    environ: Mapping[str, str],
) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    file = _find_config_file(config_path)
    if file is not None:
        data = _load_toml_file(file)
        # Plan tables live in the same file; they are not settings
        data.pop("section", None)
        merged.update(_normalize_keys(data))

    # Environment variables override all
    for key, value in environ.items():
        if key.startswith(ENV_PREFIX):
            merged[key[len(ENV_PREFIX):].upper()] = value
    return merged


def _validate_and_build(config: dict[str, Any]) -> VerifierConfig:
    probe_timeout = _as_float("PROBE_TIMEOUT", config["PROBE_TIMEOUT"])
    countdown = _as_int("COUNTDOWN_SECONDS", config["COUNTDOWN_SECONDS"])
    no_target_delay = _as_float("NO_TARGET_DELAY", config["NO_TARGET_DELAY"])
    shell = _as_opt_str(config["SHELL"])
    log_level = str(config["LOG_LEVEL"]).strip().upper()

    if probe_timeout <= 0:
        raise ConfigError("PROBE_TIMEOUT must be > 0")
    if countdown < 0:
        raise ConfigError("COUNTDOWN_SECONDS must be >= 0")
    if no_target_delay < 0:
        raise ConfigError("NO_TARGET_DELAY must be >= 0")
    if shell is None:
        raise ConfigError("SHELL must not be empty")
    if log_level not in _LOG_LEVELS:
        raise ConfigError(
            f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {log_level!r}")

    extra = {k: v for k, v in config.items() if k not in DEFAULTS}

    return VerifierConfig(
        probe_timeout=probe_timeout,
        countdown_seconds=countdown,
        no_target_delay=no_target_delay,
        target_candidates=_as_names("TARGET_CANDIDATES", config["TARGET_CANDIDATES"]),
        target_check_critical=_as_bool(
            "TARGET_CHECK_CRITICAL", config["TARGET_CHECK_CRITICAL"]),
        handoff_enabled=_as_bool("HANDOFF_ENABLED", config["HANDOFF_ENABLED"]),
        shell=shell,
        log_file_path=_as_opt_path(config["LOG_FILE_PATH"]),
        log_level=log_level,
        plan_path=_as_opt_path(config["PLAN_PATH"]),
        color=_as_bool("COLOR", config["COLOR"]),
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    path: Optional[Union[str, Path]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> VerifierConfig:
    """
    Load, merge, normalize, and validate configuration.

    `overrides` (e.g. from command-line flags) win over every other source.
    Raises ConfigError on any invalid value.
    """
    raw = _merge_sources(
        Path(path) if path is not None else None,
        os.environ if environ is None else environ,
    )
    if overrides:
        raw.update(_normalize_keys({k: v for k, v in overrides.items() if v is not None}))
    return _validate_and_build(raw)
