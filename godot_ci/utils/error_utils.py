"""Helpers for building errors with consistent context."""

from pathlib import Path
from typing import Any

from godot_ci.core.errors import ArchiveError, FileSystemError, ProcessError


def create_file_error(
    path: Path,
    operation: str,
    error: Exception,
    details: dict[str, Any] | None = None,
) -> FileSystemError:
    """Create a FileSystemError describing a failed file operation.

    Args:
        path: Path the operation was applied to
        operation: Name of the operation (``"mkdir"``, ``"copy_file"``...)
        error: Original exception
        details: Additional context

    Returns:
        The error, ready to be raised ``from`` the original exception
    """
    context = {"path": str(path), "operation": operation, "error": str(error)}
    if details:
        context.update(details)
    return FileSystemError(
        f"File operation '{operation}' failed for {path}: {error}", context
    )


def create_process_error(
    cmd: list[str], error: Exception, details: dict[str, Any] | None = None
) -> ProcessError:
    """Create a ProcessError for a command that could not be spawned."""
    context: dict[str, Any] = {"command": cmd, "error": str(error)}
    if details:
        context.update(details)
    return ProcessError(f"Failed to run {cmd[0]}: {error}", context)


def create_archive_error(
    operation: str,
    archive: Path,
    return_code: int,
    stderr: list[str] | None = None,
) -> ArchiveError:
    """Create an ArchiveError for a non-zero archiver exit."""
    context: dict[str, Any] = {
        "operation": operation,
        "archive": str(archive),
        "return_code": return_code,
    }
    if stderr:
        context["stderr"] = stderr[-10:]
    return ArchiveError(
        f"Archiver {operation} failed for {archive} (exit code {return_code})",
        context,
    )
