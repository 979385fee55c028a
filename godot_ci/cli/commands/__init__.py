"""CLI command modules."""

import typer

from godot_ci.cli.commands.export import register_commands as register_export_commands
from godot_ci.cli.commands.presets import (
    register_commands as register_presets_commands,
)
from godot_ci.cli.commands.version_key import (
    register_commands as register_version_key_commands,
)


def register_all_commands(app: typer.Typer) -> None:
    """Register all CLI commands with the main app.

    Args:
        app: The main Typer app
    """
    register_export_commands(app)
    register_presets_commands(app)
    register_version_key_commands(app)
