"""
sharedcell - shared, mutable ownership of a single record.

A record is wrapped in a reference-counted handle that many owners can clone.
Owners read through shared leases and mutate through an exclusive lease; the
lease discipline is checked at runtime and any overlap fails immediately with
`BorrowConflict`. The record is dropped, exactly once, when the last owner
releases its handle.

The package also ships scripted scenarios that simulate several components
sharing one record, an orchestrator to run them, and a small CLI.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from sharedcell.config import Settings, get_settings
from sharedcell.domain.models import RecordView, RecordWriter, SharedRecord
from sharedcell.exceptions import BorrowConflict, HandleReleased, LeaseReleased, SharedCellError
from sharedcell.handle import LeaseState, ReadGuard, SharedHandle, WriteGuard
from sharedcell.orchestrator import available_scenarios, run_scenarios
from sharedcell.scenarios.abstract import AbstractScenario, Scenario, ScenarioResult
from sharedcell.utils.logging import configure_logging, get_logger, get_trace_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Ownership core
    "SharedRecord",
    "RecordView",
    "RecordWriter",
    "SharedHandle",
    "ReadGuard",
    "WriteGuard",
    "LeaseState",
    # Errors
    "SharedCellError",
    "BorrowConflict",
    "HandleReleased",
    "LeaseReleased",
    # Orchestration
    "available_scenarios",
    "run_scenarios",
    # Scenario abstractions
    "Scenario",
    "AbstractScenario",
    "ScenarioResult",
    # Logging
    "configure_logging",
    "get_logger",
    "get_trace_logger",
]
