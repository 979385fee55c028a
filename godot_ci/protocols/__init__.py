"""Protocol definitions for godot-ci adapters.

The pipeline services depend only on these protocols, so tests can swap in
fakes for the archiver, the downloader and the process runner.
"""

from .archiver_protocol import ArchiverProtocol
from .downloader_protocol import DownloaderProtocol
from .file_adapter_protocol import FileAdapterProtocol
from .process_runner_protocol import ProcessOutput, ProcessRunnerProtocol


__all__ = [
    "ArchiverProtocol",
    "DownloaderProtocol",
    "FileAdapterProtocol",
    "ProcessOutput",
    "ProcessRunnerProtocol",
]
