"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from bootverify import config as config_mod
from bootverify.config import DEFAULT_TARGET_CANDIDATES, load_config
from bootverify.errors import ConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch):
    """No system or CWD config files leak into tests."""
    monkeypatch.setattr(config_mod, "SYSTEM_CONFIG_PATH", tmp_path / "absent.toml")
    monkeypatch.chdir(tmp_path)


def write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_defaults_without_sources(self):
        cfg = load_config(environ={})
        assert cfg.probe_timeout == 5.0
        assert cfg.countdown_seconds == 3
        assert cfg.target_candidates == DEFAULT_TARGET_CANDIDATES
        assert cfg.target_check_critical is False
        assert cfg.handoff_enabled is True
        assert cfg.shell == "/bin/bash"
        assert cfg.log_level == "WARNING"
        assert cfg.log_file_path is None


class TestPrecedence:
    def test_file_overrides_defaults(self, tmp_path):
        path = write(tmp_path / "c.toml", 'countdown_seconds = 5\nshell = "/bin/zsh"\n')
        cfg = load_config(path, environ={})
        assert cfg.countdown_seconds == 5
        assert cfg.shell == "/bin/zsh"

    def test_env_overrides_file(self, tmp_path):
        path = write(tmp_path / "c.toml", "countdown_seconds = 5\n")
        cfg = load_config(path, environ={"BOOTVERIFY_COUNTDOWN_SECONDS": "1"})
        assert cfg.countdown_seconds == 1

    def test_overrides_win(self, tmp_path):
        cfg = load_config(
            environ={"BOOTVERIFY_LOG_LEVEL": "info"},
            overrides={"LOG_LEVEL": "debug", "COUNTDOWN_SECONDS": None},
        )
        assert cfg.log_level == "DEBUG"
        assert cfg.countdown_seconds == 3

    def test_cwd_config_is_found(self, tmp_path):
        write(tmp_path / "config.toml", "target_check_critical = true\n")
        assert load_config(environ={}).target_check_critical is True

    def test_unrelated_env_ignored(self):
        cfg = load_config(environ={"COUNTDOWN_SECONDS": "9"})
        assert cfg.countdown_seconds == 3


class TestCoercion:
    def test_candidates_from_env_string(self):
        cfg = load_config(environ={"BOOTVERIFY_TARGET_CANDIDATES": "sddm, lightdm"})
        assert cfg.target_candidates == ("sddm", "lightdm")

    def test_bool_strings(self):
        cfg = load_config(environ={"BOOTVERIFY_HANDOFF_ENABLED": "no"})
        assert cfg.handoff_enabled is False

    def test_unknown_keys_kept_in_extra(self, tmp_path):
        path = write(tmp_path / "c.toml", 'kiosk_name = "lobby"\n')
        assert load_config(path, environ={}).extra == {"KIOSK_NAME": "lobby"}

    def test_plan_tables_are_not_settings(self, tmp_path):
        path = write(tmp_path / "c.toml", '[[section]]\ntitle = "x"\n')
        assert "SECTION" not in load_config(path, environ={}).extra


class TestValidation:
    @pytest.mark.parametrize(
        "env",
        [
            {"BOOTVERIFY_PROBE_TIMEOUT": "0"},
            {"BOOTVERIFY_PROBE_TIMEOUT": "soon"},
            {"BOOTVERIFY_COUNTDOWN_SECONDS": "-1"},
            {"BOOTVERIFY_LOG_LEVEL": "LOUD"},
            {"BOOTVERIFY_COLOR": "maybe"},
            {"BOOTVERIFY_TARGET_CANDIDATES": " , "},
            {"BOOTVERIFY_SHELL": ""},
        ],
    )
    def test_invalid_values_raise(self, env):
        with pytest.raises(ConfigError):
            load_config(environ=env)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.toml", environ={})

    def test_broken_toml(self, tmp_path):
        path = write(tmp_path / "c.toml", "countdown_seconds = \n")
        with pytest.raises(ConfigError):
            load_config(path, environ={})
