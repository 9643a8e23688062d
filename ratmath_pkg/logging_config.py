"""Logging for ratmath.

Every module logs through a child of the ``ratmath`` logger. Nothing is
emitted until :func:`setup_logging` attaches handlers, which the CLI does
from its ``--log-level`` and ``--log-file`` options.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

ROOT_LOGGER = "ratmath"


class StructuredFormatter(logging.Formatter):
    """One line per record: ISO timestamp, level, logger and message.

    Records logged with ``extra={"error_code": ...}`` get the code appended
    as ``code=<CODE>`` so failed evaluations can be grepped by error code.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds")
        line = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        code = getattr(record, "error_code", None)
        if code:
            line = f"{line} code={code}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _attach(logger: logging.Logger, handler: logging.Handler) -> None:
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Route ``ratmath.*`` records to stderr and optionally a file.

    Calling it again replaces the handlers from the previous call.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Extra destination appended to alongside stderr
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    # stdout carries results; logs must not mix into it
    _attach(logger, logging.StreamHandler(sys.stderr))
    if log_file:
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"))
    return logger


def get_logger(name: str = "") -> logging.Logger:
    """Logger for a ratmath component, e.g. ``get_logger("parser")``."""
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
