"""Logging for the techlead server, service and CLI.

Records never go to stdout: under the stdio transport stdout carries
protocol frames, so the console sink is always stderr.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "techlead"
CONSOLE_FORMAT = "[techlead] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``techlead`` or a ``techlead.<name>`` child logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def _attach(
    logger: logging.Logger, handler: logging.Handler, level: int, fmt: str
) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def reset_logging() -> logging.Logger:
    """Close and detach every handler on the ``techlead`` logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    return logger


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route techlead records to stderr and, when given, to ``log_file``.

    Safe to call repeatedly: the CLI configures once from flags and again
    once ``.techlead.yml`` has been read.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = reset_logging()
    logger.setLevel(level)
    logger.propagate = False

    _attach(logger, logging.StreamHandler(sys.stderr), level, CONSOLE_FORMAT)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT)
    return logger


__all__ = ["configure_logging", "get_logger", "reset_logging"]
