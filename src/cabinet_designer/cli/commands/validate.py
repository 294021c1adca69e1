"""Validate command for checking layout scripts.

This module provides the `validate` command that checks a JSON layout script
for syntax and schema errors without replaying it.
"""

from pathlib import Path
from typing import Annotated

import typer

from cabinet_designer.application.config import (
    ConfigError,
    LayoutConfiguration,
    load_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout script to validate"),
    ],
) -> None:
    """Validate a layout script.

    Exit codes:
        0 - The script is valid
        1 - The script has errors (cannot be used)

    Example:
        cabinet-designer validate wardrobe.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    _display_summary(config)
    typer.echo("Validation passed. Configuration is valid.")


def display_load_error(error: ConfigError) -> None:
    """Display a configuration loading error.

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
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None and not isinstance(value, dict):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def _display_summary(config: LayoutConfiguration) -> None:
    cabinet = config.cabinet
    typer.echo(
        f"Cabinet: {cabinet.width:g} W x {cabinet.height:g} H x {cabinet.depth:g} D mm "
        f"(base {cabinet.base:g})"
    )
    typer.echo(f"Steps: {len(config.steps)}")
    typer.echo()
