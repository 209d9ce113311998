"""
Utilities package for sharedcell.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of ownership logic.
"""

from sharedcell.utils.logging import configure_logging, get_logger, get_trace_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "get_trace_logger",
]
