"""Logging setup for the ``wren`` logger tree.

Library modules only create named loggers (``wren.server``,
``wren.templating``, ``wren.assets``, ``wren.app``). The CLI calls
``configure_logging`` once to attach a single stream handler.

Two output formats:

- ``text``: ``2026-01-01 12:00:00 INFO     wren.server  starting server ...``
- ``json``: one object per line with ``time``, ``level``, ``logger``,
  ``message``, any ``extra=`` fields, and ``exc_info`` when present.
"""

import json
import logging
import sys
from typing import TextIO

from wren.errors import ConfigurationError

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)-16s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# LogRecord attributes that are not user-supplied extras
_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Single-line JSON log records."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class _WrenHandler(logging.StreamHandler):
    """Marks the handler installed by ``configure_logging``."""


def configure_logging(
    level: str = "info",
    fmt: str = "text",
    *,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach one stream handler to the ``wren`` logger.

    Calling it again replaces the previous handler. Raises
    ``ConfigurationError`` for an unknown level or format.
    """
    try:
        levelno = LEVELS[level.lower()]
    except KeyError:
        msg = f"LOG_LEVEL must be one of {', '.join(LEVELS)}, got {level!r}"
        raise ConfigurationError(msg) from None

    if fmt == "text":
        formatter: logging.Formatter = logging.Formatter(TEXT_FORMAT, DATE_FORMAT)
    elif fmt == "json":
        formatter = JSONFormatter()
    else:
        msg = f"LOG_FORMAT must be 'text' or 'json', got {fmt!r}"
        raise ConfigurationError(msg)

    handler = _WrenHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger("wren")
    for existing in list(logger.handlers):
        if isinstance(existing, _WrenHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(levelno)
    return logger
