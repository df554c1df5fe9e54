"""Tests for compiled-in and TOML plans."""

from __future__ import annotations

from pathlib import Path

import pytest

from bootverify.boot import Criticality, default_plan, load_plan, resolve_plan
from bootverify.errors import ConfigError

PLAN = """
[[section]]
title = "Core"

  [[section.check]]
  description = "root fs"
  command = "mountpoint -q /"

  [[section.check]]
  description = "time sync"
  command = ["timedatectl", "show"]
  criticality = "advisory"
  timeout = 2

[[section]]
title = "Net"

  [[section.check]]
  description = "dns"
  command = "host example.org"
  critical = false
"""


def write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "plan.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaultPlan:
    def test_sections_in_order(self):
        titles = [s.title for s in default_plan()]
        assert titles == ["Core System", "Network Services", "Privacy & Security"]

    def test_advisory_checks(self):
        advisory = [
            c.description
            for s in default_plan()
            for c in s.checks
            if c.criticality is Criticality.ADVISORY
        ]
        assert advisory == ["System time synchronized", "DNS resolution"]

    def test_timeout_applied(self):
        assert {c.timeout for s in default_plan(7.5) for c in s.checks} == {7.5}


class TestLoadPlan:
    def test_parses_sections_and_checks(self, tmp_path):
        plan = load_plan(write(tmp_path, PLAN), default_timeout=4)

        assert [s.title for s in plan] == ["Core", "Net"]
        root, sync = plan[0].checks
        assert root.criticality is Criticality.CRITICAL
        assert root.timeout == 4.0
        assert sync.command == ("timedatectl", "show")
        assert sync.criticality is Criticality.ADVISORY
        assert sync.timeout == 2.0
        assert plan[1].checks[0].criticality is Criticality.ADVISORY

    def test_resolve_without_path_uses_default(self):
        assert resolve_plan(None) == default_plan()

    @pytest.mark.parametrize(
        "text",
        [
            "",
            '[[section]]\n[[section.check]]\ndescription = "x"\ncommand = "true"\n',
            '[[section]]\ntitle = "S"\n[[section.check]]\ndescription = "x"\n',
            '[[section]]\ntitle = "S"\n[[section.check]]\ndescription = "x"\ncommand = "true"\ncriticality = "fatal"\n',
            '[[section]]\ntitle = "S"\n[[section.check]]\ndescription = "x"\ncommand = "true"\ntimeout = 0\n',
            "not toml at all [",
        ],
    )
    def test_invalid_plans_raise(self, tmp_path, text):
        with pytest.raises(ConfigError):
            load_plan(write(tmp_path, text))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_plan(tmp_path / "absent.toml")
