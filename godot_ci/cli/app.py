"""Main CLI application for godot-ci."""

import logging
import os
from importlib.metadata import distribution
from typing import Annotated

import typer

from godot_ci.cli.decorators.error_handling import print_stack_trace_if_verbose
from godot_ci.config.models import ENV_PREFIX
from godot_ci.core.logging import setup_logging


__all__ = ["app", "main", "__version__", "setup_logging"]


__version__ = distribution("godot-ci").version

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "INFO"


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        verbose: int = 0,
        log_file: str | None = None,
        config_file: str | None = None,
        explicit_log_level: bool = False,
    ):
        """Initialize AppContext.

        Args:
            verbose: Verbosity level
            log_file: Path to log file
            config_file: Path to configuration file
            explicit_log_level: Whether the log level came from CLI flags
        """
        self.verbose = verbose
        self.log_file = log_file
        self.config_file = config_file
        self.explicit_log_level = explicit_log_level

    def apply_config_log_level(self, log_level: str) -> None:
        """Reconfigure logging from the pipeline configuration.

        CLI flags win over the configured level.
        """
        if not self.explicit_log_level:
            setup_logging(level=log_level, log_file=self.log_file)


app = typer.Typer(
    name="godot-ci",
    help=f"""godot-ci v{__version__}

Headless export and packaging pipeline for Godot projects.

Common workflows:
  • Export all presets:  godot-ci -c godot-ci.yaml export
  • List presets:        godot-ci presets --project game/
  • Version key:         godot-ci version-key 4.2.1.stable.official.b09f793f5""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Also log to this file as JSON")
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to a YAML configuration file"),
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """godot-ci build pipeline."""
    if version:
        print(f"godot-ci v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    explicit = debug or verbose > 0
    if debug or verbose >= 2:
        log_level: int | str = logging.DEBUG
    elif verbose == 1:
        log_level = logging.INFO
    else:
        log_level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", DEFAULT_LOG_LEVEL)

    ctx.obj = AppContext(
        verbose=verbose,
        log_file=log_file,
        config_file=config_file,
        explicit_log_level=explicit,
    )
    setup_logging(level=log_level, log_file=log_file)


def main() -> int:
    """Main CLI entry point."""
    exit_code = 0

    try:
        app()
        exit_code = 0

    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print_stack_trace_if_verbose()
        exit_code = 1

    return exit_code

