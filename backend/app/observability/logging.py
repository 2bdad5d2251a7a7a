"""
Structured JSON logging.

structlog renders every event as one JSON line (timestamp, level, logger name,
event name and the keyword fields passed to log_event) and hands it to the
stdlib "portfolio" logger, so uvicorn and pytest handlers still see it.

Example:
    log_event("object_stored", file_id="65f0...", length=1024)
    log_event("unhandled_exception", severity="error", exc_info=exc, path="/api/files")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

LOGGER_NAME = "portfolio"
DEFAULT_LEVEL = "INFO"


def resolve_level(level: str | None) -> int:
    """Map a level name to its number; unknown names mean INFO."""
    number = logging.getLevelName(str(level or "").strip().upper())
    if isinstance(number, int):
        return number
    return logging.getLevelName(DEFAULT_LEVEL)


def setup_logging(level: str = DEFAULT_LEVEL) -> logging.Logger:
    numeric_level = resolve_level(level)

    logging.basicConfig(format="%(message)s", level=numeric_level, stream=sys.stdout)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # test helpers swap processors at runtime; cached loggers would miss that
        cache_logger_on_first_use=False,
    )
    return logger


def get_logger(**context: Any):
    logger = structlog.get_logger(LOGGER_NAME)
    if context:
        logger = logger.bind(**context)
    return logger


def log_event(event: str, severity: str = "info", **fields: Any):
    getattr(get_logger(), severity)(event, **fields)
