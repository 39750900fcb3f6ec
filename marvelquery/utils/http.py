"""Default aiohttp client for the Marvel gateway (GET + JSON only)."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)


class HTTPClient:
    """Async HTTP client wrapper used as the default transport.

    The session is created on first use so the client can be constructed
    outside a running event loop.
    """

    def __init__(self, timeout: float = 30.0, headers: dict[str, str] | None = None) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = headers or {"Accept": "application/json"}
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    async def get(self, url: str) -> Any:
        """GET ``url`` and decode the JSON body.

        Raises:
            aiohttp.ClientResponseError: On a non-2xx status
            aiohttp.ClientError: On connection failures
        """
        async with self.session.get(url) as response:
            logger.debug("Response received", extra={"status_code": response.status})
            response.raise_for_status()
            return await response.json()

    async def close(self) -> None:
        """Close the session; safe to call more than once."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
