"""Adapters package for external system interfaces."""

from godot_ci.protocols import (
    ArchiverProtocol,
    DownloaderProtocol,
    FileAdapterProtocol,
    ProcessRunnerProtocol,
)

from .archive_adapter import SevenZipArchiver, create_archiver
from .download_adapter import HttpDownloader, create_downloader
from .file_adapter import FileSystemAdapter, create_file_adapter
from .process_adapter import LoggerOutputMiddleware, ProcessRunner, create_process_runner


__all__ = [
    "ArchiverProtocol",
    "DownloaderProtocol",
    "FileAdapterProtocol",
    "FileSystemAdapter",
    "HttpDownloader",
    "LoggerOutputMiddleware",
    "ProcessRunner",
    "ProcessRunnerProtocol",
    "SevenZipArchiver",
    "create_archiver",
    "create_downloader",
    "create_file_adapter",
    "create_process_runner",
]
