#!/usr/bin/env python3
# bootverify/cli.py
from __future__ import annotations

"""
Command-line entry point.

Loads configuration and the plan, runs the sequencer inside a terminal
session, then carries out the returned TerminalAction: start the target
service, or replace this process with an interactive shell.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO

from bootverify.boot import (
    REASON_NO_TARGET,
    ActionKind,
    Sequencer,
    TerminalAction,
    resolve_plan,
)
from bootverify.config import VerifierConfig, load_config
from bootverify.errors import ConfigError, InterruptedRun, ServiceStartError
from bootverify.host import (
    ProbeRunner,
    ServiceManager,
    SystemdServiceManager,
    TerminalSession,
    get_host_info,
)
from bootverify.interface import wait_for_acknowledgement
from bootverify.ui import RenderConfig, StatusRenderer, colorize, init_logger, print_line

log = logging.getLogger("bootverify.cli")

EXIT_OK = 0
EXIT_FALLBACK = 1
EXIT_CONFIG = 2
EXIT_INTERRUPTED = 130

REASON_TARGET_FAILURE = "target-failure"
RESCUE_SHELL = "/bin/sh"

Exec = Callable[[str, Sequence[str]], object]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bootverify",
        description="Pre-boot health checks gating the graphical session.",
    )
    parser.add_argument("--config", type=Path, help="TOML configuration file")
    parser.add_argument("--plan", type=Path, help="TOML plan file (overrides config)")
    parser.add_argument("--dry-run", action="store_true",
                        help="print the terminal action instead of performing it")
    parser.add_argument("--no-handoff", action="store_true",
                        help="skip target discovery; exit after the checks")
    parser.add_argument("--countdown", type=int, metavar="N",
                        help="seconds to count down before the handoff")
    parser.add_argument("--log-level", metavar="LEVEL",
                        help="console log level (DEBUG..CRITICAL)")
    return parser


def shell_argv(shell: str, reason: Optional[str]) -> list[str]:
    """Login shell when no display manager exists, plain shell otherwise."""
    argv = [shell]
    if reason == REASON_NO_TARGET:
        argv.append("--login")
    return argv


def exec_shell(shell: str, reason: Optional[str], *, execvp: Exec = os.execvp) -> None:
    """Replace the current process with an interactive shell."""
    argv = shell_argv(shell, reason)
    log.info("Handing over to %s (%s)", " ".join(argv), reason)
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        execvp(shell, argv)
    except OSError as exc:
        log.critical("Cannot exec %s: %s; using %s", shell, exc, RESCUE_SHELL)
        execvp(RESCUE_SHELL, [RESCUE_SHELL])


def perform(
    action: TerminalAction,
    services: ServiceManager,
    config: VerifierConfig,
    *,
    dry_run: bool = False,
    execvp: Exec = os.execvp,
    stream: TextIO = sys.stdout,
) -> int:
    """Carry out a TerminalAction. Returns an exit code if the process survives."""
    if dry_run:
        print_line(f"action: {action}", file=stream)
        return EXIT_FALLBACK if action.kind is ActionKind.FALLBACK_SHELL else EXIT_OK

    if action.kind is ActionKind.HANDOFF and action.service:
        try:
            services.start(action.service)
            return EXIT_OK
        except ServiceStartError as exc:
            log.error("%s", exc)
            print_line(colorize(f"[FAILED] {exc}", "red"), file=stream)
            exec_shell(config.shell, REASON_TARGET_FAILURE, execvp=execvp)
            return EXIT_FALLBACK

    if action.kind is ActionKind.FALLBACK_SHELL:
        exec_shell(config.shell, action.reason, execvp=execvp)
        return EXIT_FALLBACK

    return EXIT_OK


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    services: Optional[ServiceManager] = None,
    execvp: Exec = os.execvp,
) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            args.config,
            overrides={
                "COUNTDOWN_SECONDS": args.countdown,
                "LOG_LEVEL": args.log_level,
                "HANDOFF_ENABLED": False if args.no_handoff else None,
            },
        )
        init_logger("bootverify", config.log_level, config.log_file_path)
        plan = resolve_plan(args.plan or config.plan_path, default_timeout=config.probe_timeout)
    except (ConfigError, OSError) as exc:
        print_line(colorize(f"[FAILED] Invalid configuration: {exc}", "red"), file=sys.stderr)
        if args.dry_run:
            return EXIT_CONFIG
        # A broken config must still leave the operator with a session
        exec_shell(VerifierConfig().shell, None, execvp=execvp)
        return EXIT_CONFIG

    runner = ProbeRunner()
    services = services or SystemdServiceManager(runner)
    renderer = StatusRenderer(RenderConfig.detect(sys.stdout, color=config.color), sys.stdout)
    sequencer = Sequencer(
        runner,
        services,
        renderer,
        wait_for_acknowledgement,
        config,
        terminal=TerminalSession(sys.stdout),
        host_info=get_host_info,
    )

    try:
        result = sequencer.run(plan)
    except (KeyboardInterrupt, InterruptedRun) as exc:
        log.warning("Verification interrupted: %s", exc or "SIGINT")
        return EXIT_INTERRUPTED

    return perform(result.terminal_action, services, config, dry_run=args.dry_run, execvp=execvp)
