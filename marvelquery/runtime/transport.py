"""REST transport adapter.

Turns a signed URL into a validated response envelope. The actual network
call is delegated to an injectable ``async (url) -> mapping`` callable; the
adapter's job is to normalize failures into TransportError and to check the
envelope shape before anything downstream reads it.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from ..core.config import HTTPClientFunction
from ..core.exceptions import TransportError
from ..models.envelope import APIResponse

logger = logging.getLogger(__name__)


def _status_code(exc: BaseException) -> int | None:
    if isinstance(exc, aiohttp.ClientResponseError):
        return exc.status
    status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    return status if isinstance(status, int) else None


class RESTTransport:
    """Performs GET requests and validates the response envelope."""

    def __init__(self, http_client: HTTPClientFunction) -> None:
        self._client = http_client

    async def request(self, url: str) -> APIResponse:
        """Fetch ``url`` and parse the Marvel response envelope.

        Raises:
            TransportError: On any network/HTTP failure, or when the response
                is not a valid envelope
        """
        try:
            payload: Any = await self._client(url)
        except TransportError:
            raise
        except Exception as exc:
            status_code = _status_code(exc)
            logger.error(
                "Request failed",
                extra={"status_code": status_code, "error": str(exc)},
            )
            raise TransportError(
                f"Request failed: {exc}", status_code=status_code, url=url
            ) from exc

        try:
            return APIResponse.model_validate(payload)
        except ValidationError as exc:
            logger.error(
                "Malformed response envelope",
                extra={"error_count": exc.error_count()},
            )
            raise TransportError(f"Malformed response envelope: {exc}", url=url) from exc
