"""Python logging setup for lottolotto.

Service code logs through standard library loggers under the ``lottolotto``
namespace and passes structured fields with ``extra=``. KeyValueFormatter
renders those fields after the message as ``key=value`` pairs.
"""

import logging
import os
import sys
from typing import TextIO

ROOT_LOGGER = "lottolotto"
LOG_LEVEL_ENV = "LOTTOLOTTO_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


def extra_fields(record: logging.LogRecord) -> dict[str, str | int | float | bool]:
    """Return the scalar ``extra`` attributes attached to a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_LOGRECORD_ATTRS
        and not key.startswith("_")
        and isinstance(value, (str, int, float, bool))
    }


class KeyValueFormatter(logging.Formatter):
    """Formatter that appends extra fields as ``key=value`` pairs.

    Example:
        ``2026-10-19 09:30:00,000 INFO lottolotto.service: Session started
        endpoint=pool.example.com:3333``
    """

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = extra_fields(record)
        if record.exc_info and record.exc_info[0] is not None:
            fields["exc_type"] = record.exc_info[0].__name__
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        head, sep, tail = line.partition("\n")
        return f"{head} {pairs}{sep}{tail}"


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``lottolotto`` namespace."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str | int | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a KeyValueFormatter stream handler to the package logger.

    Calling it again replaces the handler instead of adding a second one.

    Args:
        level: Log level. Defaults to $LOTTOLOTTO_LOG_LEVEL, then INFO.
        stream: Output stream (default: stderr).

    Returns:
        The configured ``lottolotto`` logger.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        if getattr(existing, "_lottolotto_handler", False):
            logger.removeHandler(existing)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(KeyValueFormatter(DEFAULT_FORMAT))
    handler._lottolotto_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
