#!/usr/bin/env python3
# hubuum_shell/ui/static/logging.py
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, Optional

from hubuum_shell.ui.utils import strip_ansi

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 1_048_576
LOG_BACKUPS = 5


class PlainFormatter(logging.Formatter):
    """Log files get the message without terminal escapes."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().formatMessage(record))


def init_logger(
    name: str = "hubuum_shell",
    level: int = logging.INFO,
    logfile: Optional[str | Path] = None,
) -> logging.Logger:
    """
    Configure the `name` logger to write to a rotating UTF-8 file.

    The prompt owns the terminal, so nothing is logged to the console; with no
    `logfile` the records are discarded. Calling this twice does not stack
    handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        if isinstance(handler, (RotatingFileHandler, logging.NullHandler)):
            logger.removeHandler(handler)
            handler.close()

    if logfile:
        path = Path(logfile)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(PlainFormatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(handler)
    else:
        logger.addHandler(logging.NullHandler())
    return logger


@contextmanager
def log_timing(logger: logging.Logger, label: str) -> Iterator[None]:
    """Log at DEBUG how long the block ran, raised or not."""
    started = time.perf_counter()
    try:
        yield
    finally:
        logger.debug("%s took %.2f ms", label, (time.perf_counter() - started) * 1000)
