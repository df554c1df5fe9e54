#!/usr/bin/env python3
# bootverify/host/probe.py
"""
Out-of-process probe execution.

Every probe runs in its own session (process group) with stdin detached
from the terminal, so a hung probe can be killed as a whole when its
timeout expires and can never read the operator's keystrokes.
"""

from __future__ import annotations

import os
import signal
import subprocess
import tempfile
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union

# Only the head of stderr is kept
MAX_STDERR_BYTES = 4096

# ---- Public result type -----------------------------------------------------


class ProbeStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    TIMED_OUT = "timed-out"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ProbeOutcome:
    """Normalized result for one probe execution."""
    status: ProbeStatus
    returncode: int
    duration_sec: float
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.PASSED

    @property
    def timed_out(self) -> bool:
        return self.status is ProbeStatus.TIMED_OUT


# ---- Runner -----------------------------------------------------------------


class ProbeRunner:
    """
    Run probe commands under an enforced timeout.

    Notes:
        - String commands go through `shell -c`; sequences are exec'd directly.
        - Timeout, launch errors and non-zero exits all map to a failed outcome.
    """

    def __init__(self, shell: str = "/bin/sh", *, encoding: str = "utf-8") -> None:
        self.shell = shell
        self.encoding = encoding

    def run(self, command: Union[str, Sequence[str]], timeout: Optional[float]) -> ProbeOutcome:
        """
        Run one probe. Nothing is logged here: callers render status lines
        while a probe runs and log the outcome afterwards.
        """
        if isinstance(command, str):
            args: List[str] = [self.shell, "-c", command]
        else:
            args = list(command)

        # stderr is a file, not a pipe: descendants that keep it open must
        # not delay the exit status of the probe itself.
        with tempfile.TemporaryFile() as err_file:
            start = time.perf_counter()
            try:
                proc = subprocess.Popen(
                    args,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=err_file,
                    start_new_session=True,
                )
            except OSError as exc:
                duration = time.perf_counter() - start
                return ProbeOutcome(ProbeStatus.ERROR, 127, duration, str(exc))

            try:
                proc.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                self._kill_group(proc)
                proc.wait()
                duration = time.perf_counter() - start
                return ProbeOutcome(
                    ProbeStatus.TIMED_OUT,
                    proc.returncode if proc.returncode is not None else -1,
                    duration,
                    self._read(err_file) or "Process timed out.",
                )
            except BaseException:
                # Interrupted while waiting: never leave an orphan behind.
                self._kill_group(proc)
                proc.wait()
                raise

            duration = time.perf_counter() - start
            status = ProbeStatus.PASSED if proc.returncode == 0 else ProbeStatus.FAILED
            return ProbeOutcome(status, proc.returncode, duration, self._read(err_file))

    # ---- Internals ----------------------------------------------------------

    def _read(self, err_file) -> str:
        err_file.seek(0)
        return err_file.read(MAX_STDERR_BYTES).decode(self.encoding, errors="replace").strip()

    @staticmethod
    def _kill_group(proc: subprocess.Popen) -> None:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        except PermissionError:
            proc.kill()
