"""Logging setup for the engine."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from skill_engine.config.logging_config import LoggingConfig

_PACKAGE_LOGGER = "skill_engine"

# Attributes present on every LogRecord; anything else came in via ``extra``.
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Format records as single-line JSON objects.

    Fields passed through ``extra=`` are included alongside the standard
    timestamp, level, logger name, and message.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure the ``skill_engine`` logger.

    Replaces any handler previously installed by this function, so calling
    it again with a new config is safe.

    Args:
        config: Logging configuration. Uses defaults if ``None``.

    Returns:
        The configured package logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        if getattr(handler, "_skill_engine_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._skill_engine_handler = True  # type: ignore[attr-defined]
    if config.structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))
    logger.addHandler(handler)
    return logger
