"""
Scenarios package for sharedcell.

This module re-exports the abstract interfaces and the concrete scenario classes
so downstream code can import from `sharedcell.scenarios` directly.
"""

from sharedcell.scenarios.abstract import (
    AbstractScenario,
    Scenario,
    ScenarioResult,
)
from sharedcell.scenarios.conflicts import (
    DoubleWriteScenario,
    ReadDuringWriteScenario,
    WriteDuringReadScenario,
)
from sharedcell.scenarios.nominal import NominalScenario
from sharedcell.scenarios.shared_reads import SharedReadsScenario

__all__ = [
    # Abstracts
    "AbstractScenario",
    "Scenario",
    "ScenarioResult",
    # Concrete scenarios
    "DoubleWriteScenario",
    "NominalScenario",
    "ReadDuringWriteScenario",
    "SharedReadsScenario",
    "WriteDuringReadScenario",
]
