"""HTTP client for the remote task API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from todo_mvp.models import RemoteConfig

logger = logging.getLogger(__name__)


class APIClient:
    """Async HTTP client with retry for the remote task API."""

    def __init__(
        self,
        config: RemoteConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        config = config or RemoteConfig(type="http")
        self.base_url = config.endpoint.rstrip("/")
        self.timeout = config.timeout
        self.retry = config.retry
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._get_headers(),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        retry: int | None = None,
    ) -> httpx.Response:
        """Make an HTTP request, retrying network errors and 5xx responses."""
        if retry is None:
            retry = self.retry

        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        last_exception: Exception | None = None
        for attempt in range(retry + 1):
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                )
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                # Don't retry client errors (4xx)
                if 400 <= e.response.status_code < 500:
                    raise
                last_exception = e
            except httpx.RequestError as e:
                last_exception = e

            if attempt < retry:
                logger.debug(
                    "%s %s failed (attempt %d/%d): %s",
                    method, url, attempt + 1, retry + 1, last_exception,
                )
                await asyncio.sleep(2**attempt)

        if last_exception:
            raise last_exception
        raise RuntimeError("Request failed after all retries")

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Any = None) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def put(self, path: str, *, json: Any = None) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path)
