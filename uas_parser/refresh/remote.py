# ==============================================
# RemoteSource
# ==============================================
#
# PURPOSE:
#   The three provider endpoints the updater needs:
#     - current version token
#     - SHA-1 of the current full payload
#     - the full payload itself
#
# CLASS: RemoteSource
# -------------------
#   Stateful — holds a requests.Session and the endpoint URLs.
#
#   Methods:
#   --------
#   - fetch_version() -> str
#   - fetch_checksum() -> str
#   - fetch_data() -> bytes             → raw payload, hashed as-is
#   - close() -> None
#
#   Any requests.RequestException (including non-2xx answers)
#   surfaces as NetworkError. No retries: the next scheduled
#   refresh is the retry.
#
# ==============================================

import logging
from typing import Optional

import requests

from uas_parser.config import ProviderConfig
from uas_parser.errors import NetworkError

logger = logging.getLogger(__name__)


class RemoteSource:
    def __init__(
        self,
        version_url: str,
        checksum_url: str,
        data_url: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.version_url = version_url
        self.checksum_url = checksum_url
        self.data_url = data_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, provider: ProviderConfig, timeout: float = 30.0) -> "RemoteSource":
        return cls(
            version_url=provider.version_url,
            checksum_url=provider.checksum_url,
            data_url=provider.data_url,
            timeout=timeout,
        )

    def fetch_version(self) -> str:
        return self._get(self.version_url).text.strip()

    def fetch_checksum(self) -> str:
        return self._get(self.checksum_url).text.strip()

    def fetch_data(self) -> bytes:
        return self._get(self.data_url).content

    def _get(self, url: str) -> requests.Response:
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"GET {url} failed: {e}") from e
        return response

    def close(self) -> None:
        self.session.close()
