"""
Abstract scenario interfaces and result contracts for sharedcell.

A scenario is one scripted run of simulated owners sharing a record: it builds
the record, hands clones of the handle to its components, drives reads and
writes through them and releases everything at the end. Concrete scenarios
implement the `Scenario` protocol and return a `ScenarioResult` so the
orchestrator and reporter can treat them uniformly.

Faulting scenarios deliberately break the lease discipline; they never return
and are excluded from `all` runs.
"""

from __future__ import annotations

import abc
import string
from typing import Dict, List, Optional, Protocol, TypedDict, runtime_checkable

from sharedcell.handle import SharedHandle
from sharedcell.utils.logging import get_trace_logger

trace = get_trace_logger()

ORIGINAL_OWNER = "original"


class ScenarioResult(TypedDict, total=False):
    """
    Observations collected while a scenario ran.

    `owner_counts` holds the owner count after the initial owner and after each
    clone, in order. `observed_values` maps each owner to the value it read
    after the mutation phase.
    """

    scenario: str
    record_id: str
    owners: int
    owner_counts: List[int]
    initial_value: int
    final_value: int
    observed_values: Dict[str, int]
    final_owner_count: int
    peak_readers: int
    destroyed: bool
    notes: Optional[str]


@runtime_checkable
class Scenario(Protocol):
    """
    Common interface all scenarios must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of what the owners do.
    faulting : bool
        Whether the scenario is expected to end in a contract violation.
    """

    name: str
    description: str
    faulting: bool

    def execute(self) -> ScenarioResult:
        """
        Run the scenario, writing its trace, and return what was observed.
        """
        ...


def component_label(index: int) -> str:
    """Name the n-th simulated component: A, B, ... Z, then C27, C28, ..."""
    if index < len(string.ascii_uppercase):
        return string.ascii_uppercase[index]
    return f"C{index + 1}"


class AbstractScenario(abc.ABC):
    """
    ABC helper for class-based scenarios.

    Holds the record parameters and the trace helpers shared by every scenario.
    Subclasses set `name` and `description` and implement `execute`.
    """

    name: str
    description: str
    faulting: bool = False

    def __init__(
        self,
        record_id: str = "ConfigItem",
        initial_value: int = 10,
        updated_value: int = 25,
        owners: int = 2,
    ) -> None:
        if owners < 1:
            raise ValueError(f"owners must be at least 1, got {owners}")
        self.record_id = record_id
        self.initial_value = initial_value
        self.updated_value = updated_value
        self.owners = owners

    @staticmethod
    def section(title: str) -> None:
        trace.info("")
        trace.info("--- %s ---", title)

    @staticmethod
    def report_owner_count(handle: SharedHandle, label: str = "Owner count") -> int:
        count = handle.owner_count
        trace.info("%s: %s", label, count, extra={"owners": count})
        return count

    @abc.abstractmethod
    def execute(self) -> ScenarioResult:  # pragma: no cover - interface only
        """Run the scenario and return its observations."""
        raise NotImplementedError


__all__ = [
    "ORIGINAL_OWNER",
    "AbstractScenario",
    "Scenario",
    "ScenarioResult",
    "component_label",
]
