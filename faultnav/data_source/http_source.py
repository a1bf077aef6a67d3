"""HTTP data source fetching JSON collections relative to a base URL."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import FetchError
from ..node_model import NodeDescriptor, parse_descriptor_json
from .base import source_relative_path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpDataSource:
    """Fetch ``<base_url>/<source>`` with a lazily created ``httpx`` client."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Accept": "application/json"},
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpDataSource":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def fetch(self, source_id: str) -> list[NodeDescriptor]:
        url = source_relative_path(source_id)
        logger.debug("GET %s%s", self.base_url, url)
        try:
            response = await self.client.get(url)
        except httpx.TimeoutException as exc:
            raise FetchError(source_id, "timed out", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise FetchError(source_id, cause=exc) from exc

        if response.status_code >= 400:
            raise FetchError(source_id, "HTTP error", status=response.status_code)
        return parse_descriptor_json(source_id, response.text)


__all__ = ["HttpDataSource", "DEFAULT_TIMEOUT_SECONDS"]
