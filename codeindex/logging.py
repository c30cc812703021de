"""Logging utilities for codeindex runs.

Phase progress (``INFO`` and ``DEBUG``) is written to stdout so it can be
followed alongside the final summary line. Skipped files, unreadable
manifests and other warnings go to stderr.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "codeindex"
_CONSOLE_FORMAT = "[codeindex] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _BelowLevel(logging.Filter):
    """Pass only records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``codeindex`` hierarchy (``codeindex.<name>``)."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route progress to stdout and problems to stderr, optionally mirroring to a file."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_CONSOLE_FORMAT)

    progress = logging.StreamHandler(sys.stdout)
    progress.setLevel(level)
    progress.addFilter(_BelowLevel(logging.WARNING))
    progress.setFormatter(formatter)
    logger.addHandler(progress)

    problems = logging.StreamHandler(sys.stderr)
    problems.setLevel(logging.WARNING)
    problems.setFormatter(formatter)
    logger.addHandler(problems)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
