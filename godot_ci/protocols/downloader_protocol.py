"""Protocol definition for remote file downloads."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class DownloaderProtocol(Protocol):
    """Protocol for fetching a URL into a local file."""

    def download(self, url: str, destination: Path) -> Path:
        """Download ``url`` to ``destination``.

        Returns:
            The destination path

        Raises:
            DownloadError: If the transfer fails
        """
        ...
