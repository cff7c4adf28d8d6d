"""Typer CLI for cable tray capacity and load calculations."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from cabletray.application.config import (
    ConfigError,
    ProjectSnapshot,
    load_free_space_overrides,
    load_snapshot,
    snapshot_to_domain,
)
from cabletray.application.services import TrayReportService
from cabletray.cli.commands import display_load_error, validate_command
from cabletray.domain.services.supports import compute_support_plan
from cabletray.infrastructure import (
    FreeSpaceFormatter,
    JsonExporter,
    SupportPlanFormatter,
    TrayReportFormatter,
)
from cabletray.logging_config import setup_logging


class ReportFormat(str, Enum):
    """Output format for reports."""

    TEXT = "text"
    JSON = "json"


app = typer.Typer(
    name="cabletray",
    help="Cable tray free space, support spacing and load calculations.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging on stderr")
    ] = False,
) -> None:
    """Cable tray free space, support spacing and load calculations."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


def _load_domain(snapshot_file: Path) -> ProjectSnapshot:
    """Load a snapshot file or exit with code 1."""
    try:
        return snapshot_to_domain(load_snapshot(snapshot_file))
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


@app.command(name="free-space")
def free_space(
    snapshot_file: Annotated[
        Path, typer.Argument(help="Path to the JSON snapshot file")
    ],
    overrides: Annotated[
        Path | None,
        typer.Option(
            "--overrides",
            help="JSON object of operator free space values keyed by tray id",
        ),
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print JSON instead of a table")
    ] = False,
) -> None:
    """Show free space per tray."""
    snapshot = _load_domain(snapshot_file)

    provided = None
    if overrides is not None:
        try:
            provided = load_free_space_overrides(overrides)
        except ConfigError as e:
            display_load_error(e)
            raise typer.Exit(code=1)

    values = TrayReportService(snapshot).free_space_by_tray_id(provided)
    if as_json:
        typer.echo(JsonExporter().export_free_space(snapshot.trays, values))
    else:
        typer.echo(FreeSpaceFormatter().format(snapshot.trays, values))


@app.command()
def report(
    snapshot_file: Annotated[
        Path, typer.Argument(help="Path to the JSON snapshot file")
    ],
    tray: Annotated[
        str | None,
        typer.Option("--tray", "-t", help="Only report the tray with this name"),
    ] = None,
    output_format: Annotated[
        ReportFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = ReportFormat.TEXT,
) -> None:
    """Show free space, supports, loads and load curve status per tray."""
    snapshot = _load_domain(snapshot_file)

    trays = snapshot.trays
    if tray is not None:
        selected = snapshot.tray_named(tray)
        if selected is None:
            typer.echo(f"Error: tray '{tray}' not found in snapshot", err=True)
            raise typer.Exit(code=1)
        trays = (selected,)

    results = TrayReportService(snapshot).report_all(trays)
    if output_format == ReportFormat.JSON:
        typer.echo(JsonExporter().export_report(results))
    else:
        typer.echo(TrayReportFormatter().format(results))


@app.command()
def supports(
    length_mm: Annotated[
        float, typer.Option("--length-mm", "-l", help="Tray length in mm")
    ],
    distance_m: Annotated[
        float, typer.Option("--distance-m", "-d", help="Support distance in meters")
    ],
    weight_kg: Annotated[
        float | None,
        typer.Option("--weight-kg", "-w", help="Weight of one support in kg"),
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print JSON instead of text")
    ] = False,
) -> None:
    """Calculate supports for a tray run."""
    plan = compute_support_plan(length_mm, distance_m, weight_kg)
    if as_json:
        typer.echo(JsonExporter().export_support_plan(plan))
        return
    typer.echo(SupportPlanFormatter().format(plan))
    if not plan.is_complete:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
