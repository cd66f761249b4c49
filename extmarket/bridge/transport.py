"""HTTP transport for the remote marketplace, built on httpx.

Every request carries the configured ``Authorization: apikey: <key>``
header.  Failures of any kind (connection errors, timeouts, non-2xx
responses) surface as ``TransportError`` chained to the underlying httpx
exception.  There are no retries: one attempt per call.

Downloads are streamed to disk in fixed-size chunks so large installer
packages are never held in memory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from extmarket.config import MarketConfig
from extmarket.core.errors import TransportError

logger = logging.getLogger(__name__)

# Chunk size for streaming downloads (80 KB)
DOWNLOAD_CHUNK = 81920


class HttpTransport:
    """Marketplace ``HttpClient`` backed by an ``httpx.Client``.

    Parameters
    ----------
    config:
        Supplies the API key, user agent, and timeout.
    client:
        Optional pre-built ``httpx.Client``.  Tests pass one built on
        ``httpx.MockTransport``.  A client passed in is not closed by
        :meth:`close`.
    """

    def __init__(
        self,
        config: MarketConfig,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(
            timeout=config.http_timeout_seconds,
            follow_redirects=True,
        )
        self._headers = {"User-Agent": config.user_agent, **config.auth_headers()}

    def get(self, url: str) -> bytes:
        """GET *url* and return the raw response body."""
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc
        return response.content

    def download(self, url: str, dest: Path) -> None:
        """Stream the body of *url* into *dest*, overwriting it."""
        logger.debug("Downloading %s -> %s", url, dest)
        try:
            with self._client.stream("GET", url, headers=self._headers) as response:
                response.raise_for_status()
                with dest.open("wb") as fh:
                    for chunk in response.iter_bytes(DOWNLOAD_CHUNK):
                        fh.write(chunk)
        except httpx.HTTPError as exc:
            raise TransportError(f"Download of {url} failed: {exc}") from exc

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
