"""
Aurex API Client
----------------
Thin transport over the Aurex dashboard API.
Attaches the bearer token, serializes JSON, parses every body as JSON.

Rules:
- One attempt per call: no retries, no timeout, no rate limiting
- HTTP status is not interpreted; the JSON envelope is the answer
- Transport and decode failures propagate to the caller
- API key is never logged
"""

from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode
import logging

import httpx

from ..config import DEFAULT_BASE_URL, AurexAgentConfig


class AurexClient:
    """
    Async client for the dashboard API.

    ``transport`` is the seam for substituting the network, e.g. an
    ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url or DEFAULT_BASE_URL
        self._transport = transport
        self._logger = logging.getLogger("aurex.api.client")

    @classmethod
    def from_config(
        cls,
        config: AurexAgentConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AurexClient":
        return cls(config.api_key, config.base_url, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> Dict[str, str]:
        """Request headers with authentication."""
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Join base URL and path, appending a query string for non-empty params."""
        url = f"{self._base_url}{path}"
        if params:
            url += "?" + urlencode({key: str(value) for key, value in params.items()})
        return url

    async def get(self, path: str, params: Optional[Mapping[str, Union[str, int, float]]] = None) -> Any:
        """Make a GET request and return the parsed JSON body."""
        return await self._request("GET", self.build_url(path, params))

    async def post(self, path: str, body: Any = None) -> Any:
        """Make a POST request; ``body`` is sent as JSON unless it is None."""
        return await self._request("POST", self.build_url(path), body=body)

    async def _request(self, method: str, url: str, body: Any = None) -> Any:
        self._logger.debug(f"{method} {url}")

        request_kwargs: Dict[str, Any] = {"headers": self.headers}
        if body is not None:
            request_kwargs["json"] = body

        async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
            response = await client.request(method, url, **request_kwargs)

        self._logger.debug(f"{method} {url} -> {response.status_code}")
        return response.json()

    def __repr__(self) -> str:
        return f"AurexClient(base_url={self._base_url})"
