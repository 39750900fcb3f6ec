"""Library entry point: ``init()`` and the query factory it returns.

Architecture:
    ``init()`` builds one immutable Config and wraps it in a QueryFactory.
    The factory owns the collaborators every query shares (parameter
    manager, transport, result validator) and is itself the callable used to
    create queries, both by callers and by the AutoQuery engine::

        api = init(public_key, private_key, auto_query=True)
        query = api("characters", {"name": "Peter Parker"})
        await query.fetch()

Design Decisions:
    - The factory owns the default aiohttp client and closes it in
      ``close()`` / ``async with``; an injected ``http_client`` is never
      closed by the library
    - Independent factories hold independent configurations, so several API
      accounts can be used side by side
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..core.config import (
    DEFAULT_BASE_URL,
    APIKeys,
    Config,
    HTTPClientFunction,
    OnRequestFunction,
    OnResultFunction,
    ValidationOptions,
)
from ..core.endpoint import EndpointLike
from ..models.registry import SchemaRegistry
from ..runtime.params import ParameterManager
from ..runtime.transport import RESTTransport
from ..runtime.validator import ResultValidator
from ..utils.http import HTTPClient
from .query import MarvelQuery

logger = logging.getLogger(__name__)


class QueryFactory:
    """Creates MarvelQuery instances that share one Config.

    Example:
        >>> async with init(public_key, private_key, auto_query=True) as api:
        ...     query = await api("characters", {"name": "Peter Parker"}).fetch()
        ...     spider_man = query.results[0]
        ...     comics = await spider_man["comics"].query({"limit": 5}).fetch()
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self._http: HTTPClient | None = None
        http_client = config.http_client
        if http_client is None:
            self._http = HTTPClient(timeout=config.timeout)
            http_client = self._http.get
        self.transport = RESTTransport(http_client)
        self.parameters = ParameterManager(config)
        self.validator = ResultValidator(config.schemas)
        self._closed = False

    def __call__(
        self, endpoint: EndpointLike, params: Mapping[str, Any] | None = None
    ) -> MarvelQuery:
        """Create an unfetched query.

        Args:
            endpoint: Endpoint tuple, or a bare type such as ``"characters"``
            params: Query parameters (snake_case or camelCase names)

        Raises:
            InvalidEndpoint: If the endpoint is malformed
            ParameterValidationError: If parameters are invalid and strict
                parameter validation is enabled
        """
        return MarvelQuery(endpoint, params, factory=self)

    query = __call__

    async def close(self) -> None:
        """Close the default HTTP client, if this factory created one."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Closing QueryFactory")
        if self._http is not None:
            await self._http.close()

    async def __aenter__(self) -> QueryFactory:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()


def init(
    public_key: str,
    private_key: str,
    *,
    auto_query: bool,
    global_params: Mapping[str, Mapping[str, Any]] | None = None,
    omit_undefined: bool = True,
    on_request: OnRequestFunction | None = None,
    on_result: Mapping[str, OnResultFunction] | None = None,
    http_client: HTTPClientFunction | None = None,
    validation: ValidationOptions | None = None,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 30.0,
    schemas: SchemaRegistry | None = None,
) -> QueryFactory:
    """Configure the library and return a query factory.

    Args:
        public_key: Marvel API public key
        private_key: Marvel API private key
        auto_query: Rewrite embedded references into fetchable sub-queries
        global_params: Parameters for every query (``"all"``) or per type
        omit_undefined: Drop None-valued parameters before merging
        on_request: Called as ``(url, endpoint, params)`` before each request
        on_result: Called with each page of raw results, keyed by type
            with ``"any"`` as the fallback; coroutines are awaited
        http_client: ``async (url) -> dict`` replacing the default client
        validation: Validator toggles (all enabled by default)
        base_url: API root
        timeout: Total request timeout of the default client, in seconds
        schemas: Parameter/result schema registry (bundled models by default)

    Returns:
        QueryFactory; call it with an endpoint to create a query

    Raises:
        MissingCredentials: If either key is empty
    """
    config = Config(
        keys=APIKeys(public_key=public_key, private_key=private_key),
        auto_query=auto_query,
        global_params=global_params or {},
        omit_undefined=omit_undefined,
        on_request=on_request,
        on_result=on_result or {},
        http_client=http_client,
        validation=validation or ValidationOptions(),
        base_url=base_url,
        timeout=timeout,
        **({"schemas": schemas} if schemas is not None else {}),
    )
    logger.debug(
        "Initialized",
        extra={"auto_query": auto_query, "base_url": config.base_url},
    )
    return QueryFactory(config)


def init_from_env(**kwargs: Any) -> QueryFactory:
    """Like ``init()``, reading the keys from MARVEL_PUBLIC_KEY / MARVEL_PRIVATE_KEY.

    Raises:
        MissingCredentials: If either variable is unset or empty
    """
    keys = APIKeys.from_env()
    return init(keys.public_key, keys.private_key, **kwargs)
