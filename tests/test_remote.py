# ==============================================
# Tests for RemoteSource
# ==============================================

from unittest.mock import MagicMock

import pytest
import requests

from uas_parser.config import ProviderConfig
from uas_parser.errors import NetworkError
from uas_parser.refresh import RemoteSource


def _response(text="", content=b"", error=None):
    response = MagicMock()
    response.text = text
    response.content = content
    if error is not None:
        response.raise_for_status.side_effect = error
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def remote(session):
    return RemoteSource("http://v", "http://c", "http://d", timeout=5, session=session)


class TestRemoteSource:
    def test_fetch_version_strips(self, remote, session):
        session.get.return_value = _response(text="20240101-01\n")
        assert remote.fetch_version() == "20240101-01"
        session.get.assert_called_once_with("http://v", timeout=5)

    def test_fetch_checksum(self, remote, session):
        session.get.return_value = _response(text=" abc123 ")
        assert remote.fetch_checksum() == "abc123"

    def test_fetch_data_returns_bytes(self, remote, session):
        session.get.return_value = _response(content=b"[os]\n")
        assert remote.fetch_data() == b"[os]\n"
        session.get.assert_called_once_with("http://d", timeout=5)

    def test_connection_error(self, remote, session):
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(NetworkError):
            remote.fetch_version()

    def test_http_error(self, remote, session):
        session.get.return_value = _response(error=requests.HTTPError("503"))
        with pytest.raises(NetworkError):
            remote.fetch_data()

    def test_from_config(self):
        provider = ProviderConfig(data_url="http://x/data", version_url="http://x/ver", checksum_url="http://x/sha1")
        remote = RemoteSource.from_config(provider, timeout=3)
        assert remote.data_url == "http://x/data"
        assert remote.version_url == "http://x/ver"
        assert remote.checksum_url == "http://x/sha1"
        assert remote.timeout == 3
        remote.close()
