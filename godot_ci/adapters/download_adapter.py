"""HTTP download adapter."""

import logging
from pathlib import Path

import requests

from godot_ci.core.errors import DownloadError
from godot_ci.protocols import DownloaderProtocol


logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class HttpDownloader:
    """Download files over HTTP(S) with requests.

    ``requests.Session`` is not guaranteed to be thread-safe, so every
    download opens its own session unless one is injected.
    """

    def __init__(self, session: requests.Session | None = None) -> None:
        self._session = session

    def download(self, url: str, destination: Path) -> Path:
        logger.info("Downloading %s", url)
        destination.parent.mkdir(parents=True, exist_ok=True)
        session = self._session or requests.Session()
        try:
            with session.get(url, stream=True, allow_redirects=True) as response:
                response.raise_for_status()
                with destination.open("wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except requests.exceptions.RequestException as e:
            destination.unlink(missing_ok=True)
            raise DownloadError(
                f"Failed to download {url}: {e}",
                {"url": url, "destination": str(destination)},
            ) from e
        except OSError as e:
            destination.unlink(missing_ok=True)
            raise DownloadError(
                f"Failed to write {destination}: {e}",
                {"url": url, "destination": str(destination)},
            ) from e
        finally:
            if self._session is None:
                session.close()

        logger.info(
            "Finished downloading %s (%d bytes)",
            destination,
            destination.stat().st_size,
        )
        return destination


def create_downloader() -> DownloaderProtocol:
    """Create the default HTTP downloader."""
    return HttpDownloader()
