"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from godot_ci.core.errors import (
    ConfigError,
    ExportFailed,
    GodotCIError,
    PackagingFailed,
    RelocationFailed,
    ToolchainAcquisitionFailed,
)
from godot_ci.core.structlog_logger import get_struct_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to turn pipeline errors into a log line and exit code 1.

    Args:
        func: The function to decorate

    Returns:
        Decorated function with error handling
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigError as e:
            logger.error("configuration_error", error=str(e), context=e.context)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except ToolchainAcquisitionFailed as e:
            logger.error("toolchain_error", error=str(e), context=e.context)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except ExportFailed as e:
            logger.error("export_error", error=str(e), context=e.context)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except PackagingFailed as e:
            logger.error("packaging_error", error=str(e), context=e.context)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except RelocationFailed as e:
            logger.error("relocation_error", error=str(e), context=e.context)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except GodotCIError as e:
            logger.error("godot_ci_error", error=str(e), context=e.context)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            print_stack_trace_if_verbose()
            raise typer.Exit(1) from e

    return wrapper


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in ["-v", "-vv", "--verbose", "--debug"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
