"""
Structured logging utilities for sharedcell.

Two streams are configured here:

- Diagnostics (lease bookkeeping, CLI failures) go to stderr through a concise
  human formatter, or an optional JSON formatter for structured logs.
- The ownership trace (record displays, mutations, owner counts, destruction)
  goes to stdout through the dedicated ``sharedcell.trace`` logger, one bare
  message per line, always at INFO.

Usage:
    from sharedcell.utils.logging import configure_logging, get_logger, get_trace_logger

    configure_logging(level="INFO", json_logs=False)
    log = get_logger(__name__)
    log.debug("lease acquired", extra={"mode": "read"})
    get_trace_logger().info("Data ID: ConfigItem, Current Value: 10")
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

TRACE_LOGGER_NAME = "sharedcell.trace"

# Attributes every LogRecord carries; anything else was passed through `extra=`.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    for key, value in vars(record).items():
        if key in _STANDARD_ATTRS or key == "extra":
            continue
        payload[key] = value
    # Legacy callers nest their fields under a single `extra` attribute.
    if hasattr(record, "extra") and isinstance(record.extra, dict):
        payload.update(record.extra)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


class ExcludeTraceFilter(logging.Filter):
    """Keep trace records off the diagnostic handler; they have their own stream."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not record.name.startswith(TRACE_LOGGER_NAME)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
) -> None:
    """
    Configure root logging and the trace stream.

    Parameters
    ----------
    level : str
        Diagnostic logging level name (e.g., "DEBUG", "INFO", "WARNING").
        The trace stream is unaffected and always emits at INFO.
    json_logs : bool
        Whether to emit diagnostics as JSON. If False, uses a concise human formatter.
    """
    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "exclude_trace": {"()": ExcludeTraceFilter},
            },
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
                "trace": {
                    "format": "%(message)s",
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "filters": ["exclude_trace"],
                    "level": level,
                },
                "trace": {
                    "class": "logging.StreamHandler",
                    "formatter": "trace",
                    "stream": "ext://sys.stdout",
                    "level": "INFO",
                },
            },
            "loggers": {
                TRACE_LOGGER_NAME: {
                    "handlers": ["trace"],
                    "level": "INFO",
                },
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name. If name is None, returns the root logger.
    """
    return logging.getLogger(name)


def get_trace_logger() -> logging.Logger:
    """Logger for the stdout ownership trace."""
    return logging.getLogger(TRACE_LOGGER_NAME)


__all__ = [
    "TRACE_LOGGER_NAME",
    "ExcludeTraceFilter",
    "JsonFormatter",
    "configure_logging",
    "get_logger",
    "get_trace_logger",
]
