"""Logging configuration using loguru.

The wizard is interactive, so the console sink stays terse (level and
message only) and defaults to warnings.  A log file, when configured, gets
the full record at DEBUG so a failed session can be reconstructed: every
dispatched event, discarded image fetch and submit attempt.

stdlib loggers (httpx, httpcore) are routed into loguru.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


class _InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the caller
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "WARNING", *, log_file: Path | None = None, sink: TextIO | None = None) -> None:
    """Install the wizard's sinks, replacing any existing loguru handlers.

    *sink* defaults to ``sys.stderr`` so prompts on stdout stay clean.
    """
    level = level.upper()

    logger.remove()
    logger.add(sink or sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=None if sink is None else False)
    if log_file is not None:
        logger.add(log_file, level="DEBUG", format=FILE_FORMAT, rotation="10 MB", retention=5, encoding="utf-8")

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    # Per-request INFO lines from the HTTP client would flood the console
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging initialised (console={}, file={})", level, log_file)
