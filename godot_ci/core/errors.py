"""Error hierarchy for godot-ci.

Every error raised by the pipeline derives from :class:`GodotCIError`. Errors
carry an optional ``context`` dictionary with structured details that the CLI
and the logging layer can render.
"""

from typing import Any


class GodotCIError(Exception):
    """Base exception for all godot-ci errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __str__(self) -> str:
        return self.message


class ConfigError(GodotCIError):
    """Invalid or missing configuration."""


class ConfigNotFound(ConfigError):
    """The project has no export preset file."""


class ToolchainAcquisitionFailed(GodotCIError):
    """Downloading, extracting or locating the engine toolchain failed."""


class ExportFailed(GodotCIError):
    """An engine export invocation returned a non-zero status."""


class PackagingFailed(GodotCIError):
    """Archiving or SDK assembly failed for one or more artifacts."""


class RelocationFailed(GodotCIError):
    """Copying one or more artifacts to the export destination failed."""


class RelocationSkipped(GodotCIError):
    """An artifact could not be relocated because it was never archived.

    This condition is recoverable: the relocator records it and moves on.
    """


class FileSystemError(GodotCIError):
    """A file system operation failed."""


class ProcessError(GodotCIError):
    """An external process could not be spawned."""


class ArchiveError(GodotCIError):
    """The external archiver reported a failure."""


class DownloadError(GodotCIError):
    """Fetching a remote file failed."""


__all__ = [
    "ArchiveError",
    "ConfigError",
    "ConfigNotFound",
    "DownloadError",
    "ExportFailed",
    "FileSystemError",
    "GodotCIError",
    "PackagingFailed",
    "ProcessError",
    "RelocationFailed",
    "RelocationSkipped",
    "ToolchainAcquisitionFailed",
]
