"""Typer CLI for the cabinet designer."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from cabinet_designer.application import (
    DimensionsInput,
    ListCarcassPartsCommand,
    RunLayoutScriptCommand,
)
from cabinet_designer.application.config import ConfigError, load_config
from cabinet_designer.cli.commands import display_load_error, validate_command
from cabinet_designer.domain.constants import (
    DEFAULT_BASE,
    DEFAULT_DEPTH,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
)
from cabinet_designer.infrastructure import (
    JsonReportFormatter,
    LayoutDiagramFormatter,
    PartsListFormatter,
    SectionTableFormatter,
    StepReportFormatter,
)

OUTPUT_FORMATS = ("text", "json", "diagram", "sections", "parts")

app = typer.Typer(
    name="cabinet-designer",
    help="Lay out shelves, stands and hanging rods inside a cabinet carcass.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.command()
def build(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout script"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json, diagram, sections, parts"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to a file instead of stdout"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine decisions to stderr"),
    ] = False,
) -> None:
    """Replay a layout script and report the resulting cabinet.

    Exit codes:
        0 - Every step was applied
        1 - The script could not be loaded
        2 - The script ran but at least one step was rejected
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = RunLayoutScriptCommand().execute(config)
    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    cabinet = result.cabinet
    if output_format == "json":
        report = JsonReportFormatter().format_result(result)
    elif output_format == "diagram":
        report = LayoutDiagramFormatter().format(cabinet)
    elif output_format == "sections":
        report = SectionTableFormatter().format(cabinet)
    elif output_format == "parts":
        report = PartsListFormatter().format(cabinet.get_all_parts())
    else:  # "text"
        report = "\n\n".join(
            [
                StepReportFormatter().format(result.outcomes),
                LayoutDiagramFormatter().format(cabinet),
                SectionTableFormatter().format(cabinet),
                PartsListFormatter().format(cabinet.get_all_parts()),
            ]
        )

    if output_file is not None:
        output_file.write_text(report + "\n", encoding="utf-8")
        typer.echo(f"Report written to {output_file}")
    else:
        typer.echo(report)

    if result.failed_steps:
        for outcome in result.failed_steps:
            typer.echo(
                f"Step {outcome.index} ({outcome.action}) rejected: {outcome.message}",
                err=True,
            )
        raise typer.Exit(code=2)


@app.command()
def parts(
    width: Annotated[float, typer.Option("--width", "-w", help="Outer width in mm")] = DEFAULT_WIDTH,
    height: Annotated[float, typer.Option("--height", "-h", help="Outer height in mm")] = DEFAULT_HEIGHT,
    depth: Annotated[float, typer.Option("--depth", "-d", help="Outer depth in mm")] = DEFAULT_DEPTH,
    base: Annotated[float, typer.Option("--base", "-b", help="Plinth height in mm")] = DEFAULT_BASE,
) -> None:
    """Display the parts list of an empty carcass."""
    dimensions = DimensionsInput(width=width, height=height, depth=depth, base=base)
    part_list, errors = ListCarcassPartsCommand().execute(dimensions)

    if errors:
        for error in errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    typer.echo(PartsListFormatter().format(part_list))


if __name__ == "__main__":
    app()
