"""
Pytest configuration for sharedcell.

Provides fixtures for:
- Capturing the ownership trace emitted on the `sharedcell.trace` logger
- Isolating cached settings and environment overrides
- Undoing the handlers installed by `configure_logging`
"""

from __future__ import annotations

import logging
from typing import Callable, Generator, List

import pytest

from sharedcell.config import get_settings
from sharedcell.utils.logging import TRACE_LOGGER_NAME

SETTINGS_ENV_VARS = (
    "LOG_LEVEL",
    "LOG_JSON",
    "RECORD_ID",
    "RECORD_INITIAL_VALUE",
    "RECORD_UPDATED_VALUE",
    "SCENARIO_OWNERS",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Start every test from default settings.

    Clears the settings cache and any env override a developer may have exported.
    """
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def isolated_logging() -> Generator[None, None, None]:
    """
    Remove the stream handlers `configure_logging` attaches and restore levels.

    pytest's own capture handlers are subclasses of StreamHandler and are left alone.
    """
    root = logging.getLogger()
    trace = logging.getLogger(TRACE_LOGGER_NAME)
    saved_levels = {root: root.level, trace: trace.level}
    yield
    for logger, level in saved_levels.items():
        for handler in list(logger.handlers):
            if type(handler) is logging.StreamHandler:
                logger.removeHandler(handler)
        logger.setLevel(level)


@pytest.fixture
def trace_lines(caplog: pytest.LogCaptureFixture) -> Callable[[], List[str]]:
    """
    Capture the ownership trace and return a reader for it.

    The returned callable yields the non-blank trace messages emitted so far.
    """
    caplog.set_level(logging.INFO, logger=TRACE_LOGGER_NAME)

    def _read() -> List[str]:
        return [
            record.getMessage()
            for record in caplog.records
            if record.name == TRACE_LOGGER_NAME and record.getMessage()
        ]

    return _read
