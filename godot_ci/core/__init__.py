from .errors import (
    ArchiveError,
    ConfigError,
    ConfigNotFound,
    DownloadError,
    ExportFailed,
    FileSystemError,
    GodotCIError,
    PackagingFailed,
    ProcessError,
    RelocationFailed,
    RelocationSkipped,
    ToolchainAcquisitionFailed,
)
from .logging import setup_logging


__all__ = [
    "setup_logging",
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
