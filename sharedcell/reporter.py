from __future__ import annotations

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from sharedcell.scenarios.abstract import ScenarioResult


def _format_counts(counts: Iterable[int]) -> str:
    return " → ".join(str(count) for count in counts) or "-"


def _format_observed(observed: dict) -> str:
    return ", ".join(f"{owner}={value}" for owner, value in observed.items()) or "-"


def print_summary(results: Iterable[ScenarioResult], console: Optional[Console] = None) -> None:
    """
    Render scenario results as a rich table.

    One row per scenario: how many owners took part, how the owner count grew
    as handles were cloned, what each owner saw at the end and whether the
    record was dropped exactly once after the last release.
    """
    console = console or Console()
    results = list(results)

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    table = Table(
        title="Shared Ownership Summary",
        box=box.ROUNDED,
        caption="Owner counts are recorded after each clone",
    )

    table.add_column("Scenario", style="cyan", no_wrap=True)
    table.add_column("Record", style="magenta")
    table.add_column("Owners", justify="right", style="blue")
    table.add_column("Owner Counts", style="green")
    table.add_column("Value\n[dim](initial → final)[/dim]", justify="right", style="bold green")
    table.add_column("Observed By Owner", style="yellow")
    table.add_column("Dropped", justify="center", style="red")

    for res in results:
        initial = res.get("initial_value")
        final = res.get("final_value")
        table.add_row(
            res.get("scenario", "Unknown"),
            res.get("record_id", "-"),
            str(res.get("owners", 0)),
            _format_counts(res.get("owner_counts", [])),
            f"{initial} → {final}",
            _format_observed(res.get("observed_values", {})),
            "yes" if res.get("destroyed") else "no",
        )

    console.print(table)


__all__ = ["print_summary"]
