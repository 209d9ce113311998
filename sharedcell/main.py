from __future__ import annotations

import sys
from typing import Optional

import typer

from sharedcell.config import get_settings
from sharedcell.exceptions import SharedCellError
from sharedcell.orchestrator import available_scenarios, run_scenarios
from sharedcell.reporter import print_summary
from sharedcell.utils.logging import configure_logging, get_logger

# Exit status for a contract violation (borrow conflict, use after release).
FATAL_EXIT_CODE = 101

app = typer.Typer(help="Shared ownership with runtime-checked exclusive mutation.")
log = get_logger(__name__)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"record={settings.record_id} initial={settings.record_initial_value} "
        f"updated={settings.record_updated_value} owners={settings.scenario_owners} | "
        f"log_level={settings.log_level} json={settings.log_json}"
    )


@app.command()
def run(
    scenario: str = typer.Option(
        "all",
        "--scenario",
        "--scenarios",
        "-s",
        help="Scenario to run (e.g., nominal, shared_reads, double_write, all, list).",
    ),
    record_id: Optional[str] = typer.Option(
        None, "--record-id", help="Identifier of the shared record (default from settings)."
    ),
    initial: Optional[int] = typer.Option(
        None, "--initial", help="Initial value of the record (default from settings)."
    ),
    updated: Optional[int] = typer.Option(
        None, "--updated", help="Value written by the mutating component (default from settings)."
    ),
    owners: Optional[int] = typer.Option(
        None,
        "--owners",
        "-o",
        min=1,
        help="Number of components cloned from the original owner (default from settings).",
    ),
    summary: bool = typer.Option(
        True, "--summary/--no-summary", help="Print a summary table after the trace."
    ),
) -> None:
    """
    Run one or all scenarios and print the ownership trace.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    if scenario == "list":
        typer.echo("Available scenarios: " + ", ".join(available_scenarios()))
        return

    scenario_names = ["all"] if scenario == "all" else [scenario]
    try:
        results = run_scenarios(
            scenario_names=scenario_names,
            record_id=record_id,
            initial_value=initial,
            updated_value=updated,
            owners=owners,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--scenario") from exc
    except SharedCellError as exc:
        log.error(
            "Contract violation, aborting",
            extra={"error": type(exc).__name__, "scenario": scenario},
        )
        typer.echo(f"fatal: {exc}", err=True)
        raise typer.Exit(code=FATAL_EXIT_CODE) from exc

    if summary:
        print_summary(results)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
