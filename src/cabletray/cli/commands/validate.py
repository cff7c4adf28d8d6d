"""Validate command for checking snapshot files.

This module provides the `validate` command that checks a JSON snapshot
for errors and warnings, including cross-references between records.
"""

from pathlib import Path
from typing import Annotated

import typer

from cabletray.application.config import (
    ConfigError,
    ValidationResult,
    load_snapshot,
    validate_snapshot,
)


def validate_command(
    snapshot_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON snapshot file to validate"),
    ],
) -> None:
    """Validate a project snapshot file.

    Checks the snapshot for:
    - JSON syntax errors
    - Schema validation errors (missing fields, invalid layout settings, etc.)
    - Cross-reference problems (unknown trays in routings, missing widths,
      unknown supports or grounding cable types)

    Exit codes:
        0 - Snapshot is valid with no warnings
        1 - Snapshot has errors (cannot be used)
        2 - Snapshot is valid but has warnings

    Example:
        cabletray validate project.json
    """
    typer.echo(f"Validating {snapshot_file}...")
    typer.echo()

    try:
        config = load_snapshot(snapshot_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_snapshot(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def display_load_error(error: ConfigError) -> None:
    """Display a snapshot loading error on stderr.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation" and error.details:
        for detail in error.details:
            path = detail.get("path") or "<root>"
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    """Display validation results including errors and warnings.

    Args:
        result: The ValidationResult to display
    """
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Snapshot is valid.")
