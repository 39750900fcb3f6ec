"""Signed request URL construction.

Every request carries ``apikey``, ``ts`` and ``hash`` query parameters, where
``hash = md5(ts + private_key + public_key)`` and ``ts`` is the current time
in epoch milliseconds.
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from ..core.config import DEFAULT_BASE_URL, APIKeys
from ..core.endpoint import EndpointDescriptor, format_endpoint
from ..core.exceptions import MissingCredentials


def request_hash(timestamp: str, keys: APIKeys) -> str:
    """md5 hex digest of ``timestamp + private_key + public_key``."""
    return hashlib.md5(f"{timestamp}{keys.private_key}{keys.public_key}".encode()).hexdigest()


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(item) for item in value)
    return str(value)


def build_url(
    keys: APIKeys,
    descriptor: EndpointDescriptor,
    params: Mapping[str, Any],
    *,
    base_url: str = DEFAULT_BASE_URL,
    timestamp: str | None = None,
) -> str:
    """Build the full signed URL for a query.

    Args:
        keys: API key pair used to sign the request
        descriptor: Validated endpoint
        params: Query parameters; None values are skipped
        base_url: API root without trailing slash
        timestamp: Fixed timestamp, defaults to the current epoch millis

    Returns:
        URL of the form ``{base_url}/{path}?apikey=..&ts=..&hash=..&{params}``

    Raises:
        MissingCredentials: If either key is missing
    """
    if keys is None or not keys.public_key or not keys.private_key:
        raise MissingCredentials("Missing public or private API key")

    ts = timestamp if timestamp is not None else str(int(time.time() * 1000))
    query: dict[str, str] = {
        "apikey": keys.public_key,
        "ts": ts,
        "hash": request_hash(ts, keys),
    }
    query.update({key: _query_value(value) for key, value in params.items() if value is not None})

    return f"{base_url.rstrip('/')}/{format_endpoint(descriptor.path)}?{urlencode(query)}"
