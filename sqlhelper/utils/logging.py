"""
Logging utilities for SQLHelper.

Library modules only ask for a named logger; the embedding application
decides whether to call `configure_logging`. Standard library logging with a
human-readable formatter by default and an optional JSON formatter for
structured logs.

Usage:
    from sqlhelper.utils.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", json_logs=True)
    log = get_logger(__name__)
    log.info("connected", extra={"dialect": "MYSQL", "pooling": True})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

from sqlhelper.config import get_settings

# Structured fields callers pass through `extra=` that the JSON formatter keeps.
_PROMOTED_FIELDS = ("dialect", "pooling", "url", "driver", "sql", "pool_size")


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    for name in _PROMOTED_FIELDS:
        if hasattr(record, name):
            payload[name] = getattr(record, name)
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    if hasattr(record, "extra") and isinstance(record.extra, dict):
        payload.update(record.extra)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
) -> None:
    """
    Configure root logging.

    Parameters
    ----------
    level : str
        Logging level name (e.g., "DEBUG", "INFO", "WARNING").
    json_logs : bool
        Whether to emit logs as JSON. If False, uses a concise human formatter.
    """
    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "level": level,
                }
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )


def configure_from_settings() -> None:
    """Apply `configure_logging` with the level and format from Settings."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name. If name is None, returns the root logger.
    """
    return logging.getLogger(name)


__all__ = ["configure_logging", "configure_from_settings", "get_logger", "JsonFormatter"]
