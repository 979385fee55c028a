"""Tests for the HTTP download adapter."""

from unittest.mock import MagicMock

import pytest
import requests

from godot_ci.adapters.download_adapter import HttpDownloader, create_downloader
from godot_ci.core.errors import DownloadError
from godot_ci.protocols import DownloaderProtocol


URL = "https://example.com/Godot_v4.2.1-stable_linux.x86_64.zip"


def make_session(chunks=None, error=None):
    response = MagicMock()
    response.__enter__.return_value = response
    response.iter_content.return_value = chunks or []
    if error is not None:
        response.raise_for_status.side_effect = error
    session = MagicMock(spec=requests.Session)
    session.get.return_value = response
    return session


class TestHttpDownloader:
    """Test HttpDownloader class."""

    def test_implements_protocol(self):
        assert isinstance(create_downloader(), DownloaderProtocol)

    def test_writes_chunks(self, tmp_path):
        session = make_session(chunks=[b"abc", b"", b"def"])
        destination = tmp_path / "downloads" / "godot.zip"

        result = HttpDownloader(session).download(URL, destination)

        assert result == destination
        assert destination.read_bytes() == b"abcdef"
        session.get.assert_called_once_with(URL, stream=True, allow_redirects=True)
        session.close.assert_not_called()

    def test_http_error_raises_download_error(self, tmp_path):
        session = make_session(error=requests.exceptions.HTTPError("404 Not Found"))
        destination = tmp_path / "godot.zip"

        with pytest.raises(DownloadError, match="404") as exc_info:
            HttpDownloader(session).download(URL, destination)

        assert exc_info.value.context["url"] == URL
        assert not destination.exists()

    def test_connection_error_removes_partial_file(self, tmp_path):
        session = make_session()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        destination = tmp_path / "godot.zip"
        destination.write_bytes(b"partial")

        with pytest.raises(DownloadError):
            HttpDownloader(session).download(URL, destination)

        assert not destination.exists()
