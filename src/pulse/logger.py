"""Structured logging for Pulse.

Modules log through ``logging.getLogger(__name__)`` under the ``pulse``
logger hierarchy. ``configure_logging`` attaches a single stream handler to
the ``pulse`` logger, optionally emitting one JSON object per line.

Example:
    >>> from pulse.logger import configure_logging
    >>> configure_logging(level="DEBUG", json_logging=True)
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

LOGGER_NAME = "pulse"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)

_HANDLER_MARKER = "_pulse_handler"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event_type": getattr(record, "event_type", "log"),
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in log_entry or key.startswith("_"):
                continue
            log_entry[key] = value

        return json.dumps(log_entry, default=str)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the ``pulse`` logger or one of its children."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(level: str | int = "INFO", json_logging: bool = False) -> logging.Logger:
    """Configure the ``pulse`` logger.

    Calling this again replaces the handler installed by the previous call
    instead of adding a second one.

    Args:
        level: Log level name or number
        json_logging: Emit JSON lines instead of plain text

    Returns:
        The configured ``pulse`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    setattr(handler, _HANDLER_MARKER, True)
    if json_logging:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
