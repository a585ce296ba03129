"""Structured logging for the router.

Each Router owns its logger. Records carry structured fields through
``extra=`` and the ``JSONFormatter`` lifts them into the JSON object,
so CloudWatch Logs Insights can query ``request_id`` or ``status``
directly.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

from lumen.config import RouterConfig
from lumen.errors import ConfigurationError

# Structured fields surfaced by JSONFormatter when present on a record
FIELDS: tuple[str, ...] = ("method", "params", "request_id", "status", "duration", "error")

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def make_formatter(log_format: str) -> logging.Formatter:
    """Return the formatter for a ``RouterConfig.log_format`` value."""
    if log_format == "json":
        return JSONFormatter()
    if log_format == "text":
        return logging.Formatter(TEXT_FORMAT)
    msg = f"Unknown log_format {log_format!r}. Expected 'json' or 'text'."
    raise ConfigurationError(msg)


def create_logger(config: RouterConfig) -> logging.Logger:
    """Build a private logger for one router.

    The logger is constructed directly rather than through
    ``logging.getLogger`` so two routers never share handlers.
    """
    logger = logging.Logger(config.logger_name)
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        msg = f"Unknown log_level {config.log_level!r}."
        raise ConfigurationError(msg)
    logger.setLevel(level)
    logger.propagate = False
    set_output(logger, sys.stdout, make_formatter(config.log_format))
    return logger


def set_output(
    logger: logging.Logger,
    stream: TextIO,
    formatter: logging.Formatter | None = None,
) -> None:
    """Replace the logger's handlers with one writing to *stream*."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter or JSONFormatter())
    logger.addHandler(handler)
