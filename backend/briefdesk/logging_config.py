"""
Logging setup for briefdesk.

One handler on the package logger; module loggers propagate to it.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ROOT_LOGGER = "briefdesk"
DEFAULT_LOG_LEVEL = logging.INFO


class StructuredFormatter(logging.Formatter):
    """Formats records as `<utc iso> [LEVEL] name: message | {event data}`."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        line = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        event_data = getattr(record, "event_data", None)
        if event_data:
            line = f"{line} | {event_data}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(level: str | int = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """
    Attach the structured console handler to the package logger.

    Args:
        level: Level name ("INFO", "debug", ...) or numeric level

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = DEFAULT_LOG_LEVEL

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Calling twice (app startup plus CLI) must not duplicate output
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_event(
    logger: logging.Logger,
    level: str,
    event_type: str,
    data: Optional[Dict[str, Any]] = None,
    exc_info: bool = False,
) -> None:
    """
    Log a structured event with optional data.

    Args:
        logger: Logger instance
        level: Log level ('debug', 'info', 'warning', 'error', 'critical')
        event_type: Type of event being logged
        data: Optional dictionary of additional data
        exc_info: Attach the exception being handled
    """
    log_func = getattr(logger, level.lower())
    log_func(event_type, extra={"event_data": data or {}}, exc_info=exc_info)
