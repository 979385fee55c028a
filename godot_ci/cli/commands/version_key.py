"""Version-key command: show how an engine version string is normalized."""

from typing import Annotated

import typer

from godot_ci.cli.decorators import handle_errors
from godot_ci.toolchain import normalize_version


@handle_errors
def version_key_command(
    version: Annotated[str, typer.Argument(help="Output of 'godot --version'")],
) -> None:
    """Print the key templates are stored under for VERSION."""
    print(normalize_version(version))


def register_commands(app: typer.Typer) -> None:
    """Register the version-key command with the main app.

    Args:
        app: The main Typer app
    """
    app.command(name="version-key")(version_key_command)
