#!/usr/bin/env python3
# bootverify/ui/animated/countdown.py
from __future__ import annotations

import sys
import time
from typing import Callable, TextIO

from bootverify.ui.utils import colorize


class Countdown:
    """
    A visible N..1 countdown rewritten in place on one line.

    Usage:
        Countdown(3).run()
    """

    def __init__(
        self,
        seconds: int,
        *,
        file: TextIO = sys.stdout,
        color: bool = True,
        interval: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.seconds = max(0, int(seconds))
        self.file = file
        self.color = color
        self.interval = interval
        self._sleep = sleep
        self.ticks: list[int] = []

    def run(self) -> None:
        for remaining in range(self.seconds, 0, -1):
            digit = str(remaining)
            if self.color:
                digit = colorize(digit, "cyan", "bold")
            self.file.write(f"\r  {digit}")
            self.file.flush()
            self.ticks.append(remaining)
            self._sleep(self.interval)
        if self.seconds:
            self.file.write("\n")
            self.file.flush()
