"""Command line interface for godot-ci."""

from godot_ci.cli.app import app, main
from godot_ci.cli.commands import register_all_commands


register_all_commands(app)

__all__ = ["app", "main"]
