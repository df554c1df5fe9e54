#!/usr/bin/env python3
# bootverify/ui/static/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from bootverify.ui.utils import ANSI, strip_ansi, supports_color


class ColorizingStreamHandler(logging.StreamHandler):
    """
    StreamHandler that colors records by level when the stream is a TTY.
    """

    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["dim"],
        logging.INFO: "",
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = supports_color(self.stream)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if self._use_ansi:
                ansi = self._LEVEL_COLORS.get(record.levelno, "")
                if ansi:
                    message = f"{ansi}{message}{ANSI['reset']}"
            else:
                message = strip_ansi(message)
            self.stream.write(message + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI (good for log files)."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def init_logger(
    name: str = "bootverify",
    level: Union[int, str] = logging.WARNING,
    logfile: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Initialize a color-safe logger.

    Console: stderr, level-colored if it is a TTY.
    File (optional): rotating, plain text, UTF-8, always DEBUG.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if logfile else level)
    logger.propagate = False

    if not any(isinstance(h, ColorizingStreamHandler) for h in logger.handlers):
        console_handler = ColorizingStreamHandler(stream=sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(
            logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(console_handler)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        Path(logfile).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            logfile, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            PlainFormatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
