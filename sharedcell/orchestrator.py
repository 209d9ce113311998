"""
Orchestrator for running ownership scenarios in sequence.

Usage (example from CLI):
    from sharedcell.orchestrator import run_scenarios

    results = run_scenarios(scenario_names=["nominal"], owners=2)
    print(results)

Contract violations raised by a scenario (`BorrowConflict`, `HandleReleased`)
are not caught here; they end the run and surface to the caller.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from sharedcell.config import get_settings
from sharedcell.scenarios.abstract import Scenario, ScenarioResult
from sharedcell.scenarios.conflicts import (
    DoubleWriteScenario,
    ReadDuringWriteScenario,
    WriteDuringReadScenario,
)
from sharedcell.scenarios.nominal import NominalScenario
from sharedcell.scenarios.shared_reads import SharedReadsScenario
from sharedcell.utils.logging import get_logger

log = get_logger(__name__)

ScenarioFactory = Callable[..., Scenario]


def _scenario_factories() -> Dict[str, ScenarioFactory]:
    """Registry of available scenarios."""
    return {
        NominalScenario.name: NominalScenario,
        SharedReadsScenario.name: SharedReadsScenario,
        WriteDuringReadScenario.name: WriteDuringReadScenario,
        DoubleWriteScenario.name: DoubleWriteScenario,
        ReadDuringWriteScenario.name: ReadDuringWriteScenario,
    }


def available_scenarios(include_faulting: bool = True) -> List[str]:
    """List available scenario names, optionally leaving out the faulting ones."""
    return sorted(
        name
        for name, factory in _scenario_factories().items()
        if include_faulting or not getattr(factory, "faulting", False)
    )


def _resolve_scenario(name: str, **params: object) -> Scenario:
    factories = _scenario_factories()
    if name not in factories:
        raise ValueError(f"Unknown scenario '{name}'. Available: {', '.join(sorted(factories))}")
    return factories[name](**params)


def run_scenarios(
    scenario_names: Optional[Iterable[str]] = None,
    record_id: Optional[str] = None,
    initial_value: Optional[int] = None,
    updated_value: Optional[int] = None,
    owners: Optional[int] = None,
) -> List[ScenarioResult]:
    """
    Run one or more scenarios, one after the other.

    Parameters
    ----------
    scenario_names : iterable[str] | None
        Scenario names to execute. If None or ["all"], executes every
        non-faulting scenario.
    record_id, initial_value, updated_value : optional
        Parameters of the shared record. Default to the settings.
    owners : int | None
        Number of components cloned from the original owner. Defaults to
        settings.scenario_owners.

    Returns
    -------
    List[ScenarioResult]
        One result per executed scenario, in execution order.
    """
    settings = get_settings()
    params = {
        "record_id": record_id if record_id is not None else settings.record_id,
        "initial_value": (
            initial_value if initial_value is not None else settings.record_initial_value
        ),
        "updated_value": (
            updated_value if updated_value is not None else settings.record_updated_value
        ),
        "owners": owners if owners is not None else settings.scenario_owners,
    }

    names = list(scenario_names) if scenario_names is not None else ["all"]
    if len(names) == 1 and names[0] == "all":
        names = available_scenarios(include_faulting=False)

    # Resolve everything up front so a typo fails before any trace is written.
    scenarios = [_resolve_scenario(name, **params) for name in names]

    results: List[ScenarioResult] = []
    for scenario in scenarios:
        log.info(f"[SCENARIO START] {scenario.name}", extra={"scenario": scenario.name, **params})
        result = scenario.execute()
        results.append(result)
        log.info(
            f"[SCENARIO COMPLETE] {scenario.name}",
            extra={
                "scenario": scenario.name,
                "final_value": result.get("final_value"),
                "destroyed": result.get("destroyed"),
            },
        )

    log.info(
        f"[ORCHESTRATOR COMPLETE] {len(results)} scenario(s) executed",
        extra={"scenarios": names},
    )
    return results


__all__ = [
    "available_scenarios",
    "run_scenarios",
]
