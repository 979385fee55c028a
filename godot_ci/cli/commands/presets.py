"""Presets command: list the export presets of a project."""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from godot_ci.adapters import create_file_adapter
from godot_ci.cli.decorators import handle_errors
from godot_ci.export import PresetCatalog
from godot_ci.utils.naming import unique_sanitized_names


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@handle_errors
def presets_command(
    project: Annotated[
        Path, typer.Option("--project", "-p", help="Project directory")
    ] = Path("."),
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TEXT,
) -> None:
    """List export presets with the names used for build folders and archives."""
    presets = PresetCatalog(create_file_adapter()).load(project.resolve())
    sanitized = unique_sanitized_names(preset.name for preset in presets)

    if output_format is OutputFormat.JSON:
        data = [
            {"sanitized_name": sanitized[preset.name], **preset.to_dict_full()}
            for preset in presets
        ]
        print(json.dumps(data, indent=2))
        return

    table = Table(title=f"Export presets in {project}")
    table.add_column("Preset", style="cyan")
    table.add_column("Sanitized name")
    table.add_column("Platform")
    table.add_column("Export path")
    for preset in presets:
        table.add_row(
            preset.name,
            sanitized[preset.name],
            preset.platform,
            preset.export_path or "[yellow](not set)[/yellow]",
        )
    Console().print(table)


def register_commands(app: typer.Typer) -> None:
    """Register the presets command with the main app.

    Args:
        app: The main Typer app
    """
    app.command(name="presets")(presets_command)
