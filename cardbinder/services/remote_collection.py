"""
Client for the collection service.

Wraps the four collection routes (read all, read one set, replace one
set, toggle one card). Every transport error, timeout, unusable URL,
non-2xx status or malformed body is raised as RemoteCollectionError so
callers have one thing to catch.
"""

from typing import Any
from urllib.parse import quote

import httpx

from cardbinder.models.collection import CollectionState
from cardbinder.services.local_cache import coerce_collection_state

COLLECTION_PATH = "/api/collection"


class RemoteCollectionError(Exception):
    """Raised when the collection service cannot serve a request."""

    pass


def _coerce_flags(data: Any, set_id: str) -> dict[str, bool]:
    state = coerce_collection_state({set_id: data})
    return state[set_id]


class RemoteCollectionClient:
    """
    Async client for the collection service.

    Args:
        base_url: Service origin, e.g. "http://localhost:3000"
        timeout: Per-request timeout in seconds
        client: Optional httpx client for connection reuse. The caller
            owns it; this class never closes it.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def _url(self, *segments: str) -> str:
        url = f"{self.base_url}{COLLECTION_PATH}"
        if segments:
            url += "/" + "/".join(quote(segment, safe="") for segment in segments)
        return url

    async def _request(self, method: str, url: str, json: Any = None) -> Any:
        try:
            if self._client is not None:
                response = await self._client.request(method, url, json=json, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(method, url, json=json)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RemoteCollectionError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise RemoteCollectionError(f"{method} {url} returned invalid JSON: {e}") from e

    async def read_all(self) -> CollectionState:
        """Fetch every set's flags."""
        url = self._url()
        data = await self._request("GET", url)
        try:
            return coerce_collection_state(data)
        except ValueError as e:
            raise RemoteCollectionError(f"GET {url} returned malformed collection: {e}") from e

    async def read_set(self, set_id: str) -> dict[str, bool]:
        """Fetch one set's flags. Unknown sets come back empty."""
        url = self._url(set_id)
        data = await self._request("GET", url)
        try:
            return _coerce_flags(data, set_id)
        except ValueError as e:
            raise RemoteCollectionError(f"GET {url} returned malformed flags: {e}") from e

    async def write_set(self, set_id: str, flags: dict[str, bool]) -> None:
        """Replace one set's flags on the service."""
        await self._request("POST", self._url(set_id), json=flags)

    async def toggle_card(self, set_id: str, card_variant_id: str) -> bool:
        """Flip one card variant on the service and return the new flag."""
        url = self._url(set_id, "card", card_variant_id)
        data = await self._request("PUT", url)
        if not isinstance(data, dict) or not isinstance(data.get("collected"), bool):
            raise RemoteCollectionError(f"PUT {url} returned no collected flag")
        return data["collected"]
