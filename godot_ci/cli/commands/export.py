"""Export command: run the full build pipeline."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from godot_ci.cli.app import AppContext
from godot_ci.cli.decorators import handle_errors
from godot_ci.config import load_pipeline_config
from godot_ci.models import PipelineResult
from godot_ci.pipeline import create_build_pipeline


logger = logging.getLogger(__name__)


def _print_summary(result: PipelineResult, console: Console) -> None:
    table = Table(title="Exported presets")
    table.add_column("Preset", style="cyan")
    table.add_column("Platform")
    table.add_column("Output", style="green")

    for artifact in result.artifacts:
        output = artifact.archive_path or artifact.directory
        table.add_row(artifact.name, artifact.preset.platform, str(output))
    console.print(table)

    for name in result.skipped_presets:
        console.print(f"[yellow]Skipped preset without export path:[/yellow] {name}")
    for name in result.relocation_skipped:
        console.print(f"[yellow]Not moved (no archive):[/yellow] {name}")


@handle_errors
def export_command(
    ctx: typer.Context,
    project: Annotated[
        Path | None,
        typer.Option("--project", "-p", help="Project directory (relative_project_path)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Export directory (relative_export_path)"),
    ] = None,
    archive: Annotated[
        bool | None,
        typer.Option("--archive/--no-archive", help="Zip each export"),
    ] = None,
) -> None:
    """Provision Godot, export every preset and package the results."""
    app_ctx: AppContext = ctx.obj
    config = load_pipeline_config(
        app_ctx.config_file,
        relative_project_path=project,
        relative_export_path=output,
        archive_output=archive,
    )
    app_ctx.apply_config_log_level(config.log_level)

    result = create_build_pipeline(config).run()
    _print_summary(result, Console())


def register_commands(app: typer.Typer) -> None:
    """Register the export command with the main app.

    Args:
        app: The main Typer app
    """
    app.command(name="export")(export_command)
