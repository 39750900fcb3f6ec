"""Query instances: one endpoint, its parameters and its pagination state.

Architecture:
    A MarvelQuery moves through three states::

        Init      constructed, endpoint and parameters validated
        Fetched   at least one page received, result_history non-empty
        Complete  offset + count >= total, further fetch() calls are no-ops

    Every fetch runs the same pipeline:

        build_url -> on_request -> transport -> result validation
                  -> on_result -> AutoQuery -> state update

    ``fetch()`` mutates the instance and returns it, so the same object is
    reused page after page::

        query = api("characters", {"name_starts_with": "Spider"})
        while not query.is_complete:
            await query.fetch()
            handle(query.results)

Design Decisions:
    - Collaborators (config, parameter manager, transport, validator) come
      from the factory that built the query; nothing is global
    - Validation failures set flags on ``validated`` instead of raising;
      transport failures always raise TransportError
    - ``fetch_single()`` borrows the pipeline with limit 1 / offset 0 and
      leaves the pagination state untouched

See Also:
    - QueryFactory: Builds queries from a shared Config
    - AutoQuery: Rewrites references in fetched results
"""

from __future__ import annotations

import inspect
import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..core.endpoint import Endpoint, EndpointLike, validate_endpoint
from ..models.envelope import Metadata, ResponseData
from ..runtime.autoquery import AutoQuery
from ..runtime.url import build_url

if TYPE_CHECKING:
    from .client import QueryFactory

logger = logging.getLogger(__name__)


@dataclass
class Validated:
    """Outcome of each validation step; None when the step is disabled."""

    parameters: bool | None = None
    results: bool | None = None
    auto_query: bool | None = None


async def _call_hook(hook: Any, *args: Any) -> None:
    outcome = hook(*args)
    if inspect.isawaitable(outcome):
        await outcome


class MarvelQuery:
    """A paginated query against one endpoint.

    Attributes:
        endpoint: Normalized endpoint tuple
        type: Resource type returned by the endpoint
        params: Final request parameters (camelCase names)
        url: URL of the most recent request
        offset: Offset the next fetch() will request
        limit: Page size
        total: Total number of matching resources reported by the API
        count: Number of results in the most recent page
        metadata: Envelope metadata of the most recent response
        response_data: Pagination block of the most recent response
        results: Results of the most recent fetch
        result_history: Every result fetched by fetch(), in order
        validated: Outcome of parameter, result and AutoQuery validation
        is_complete: True once the last page has been fetched
        query_id: Identifier used to correlate log records
    """

    def __init__(
        self,
        endpoint: EndpointLike,
        params: Mapping[str, Any] | None = None,
        *,
        factory: QueryFactory,
    ) -> None:
        """Validate the endpoint and build the request parameters.

        Raises:
            InvalidEndpoint: If the endpoint is malformed
            ParameterValidationError: If parameters are invalid and strict
                parameter validation is enabled
        """
        self._factory = factory
        self.config = factory.config
        self.descriptor = validate_endpoint(endpoint)
        self.endpoint: Endpoint = self.descriptor.path
        self.type = self.descriptor.type
        self.query_id = uuid.uuid4().hex[:12]

        self.params, params_valid = factory.parameters.initialize(params, self.descriptor)
        self.offset: int = self.params.get("offset", 0)
        self.limit: int = self.params.get("limit", 0)

        self.url: str | None = None
        self.total = 0
        self.count = 0
        self.metadata: Metadata | None = None
        self.response_data: ResponseData | None = None
        self.results: list[Any] = []
        self.result_history: list[Any] = []
        self.validated = Validated(parameters=params_valid)
        self.is_complete = False

        logger.debug("Query created", extra=self._log_context())

    def __repr__(self) -> str:
        return (
            f"MarvelQuery(endpoint={self.descriptor}, offset={self.offset}, "
            f"total={self.total}, is_complete={self.is_complete})"
        )

    def _log_context(self) -> dict[str, Any]:
        return {"query_id": self.query_id, "endpoint": str(self.descriptor)}

    async def fetch(self) -> MarvelQuery:
        """Fetch the next page of results.

        Returns:
            This query, updated with the new page

        Raises:
            TransportError: On network failure or a malformed response
        """
        if self.is_complete:
            logger.info(
                f"Query for {self.descriptor} is complete, no more results to fetch",
                extra=self._log_context(),
            )
            return self

        page, results = await self._execute(self.params)

        # Advance by the echoed page size; params may be unvalidated
        next_offset = page.offset + page.limit
        self.is_complete = page.offset + page.count >= page.total
        self.offset = next_offset
        self.limit = page.limit
        self.params["offset"] = next_offset
        self.total = page.total
        self.count = page.count
        self.results = results
        self.result_history.extend(results)

        logger.debug(
            f"Fetched {page.count} of {page.total} results",
            extra={**self._log_context(), "offset": page.offset, "complete": self.is_complete},
        )
        return self

    async def fetch_single(self) -> Any | None:
        """Fetch only the first matching result.

        Returns:
            The first (extended) result, or None when nothing matched

        Raises:
            TransportError: On network failure or a malformed response
        """
        _, results = await self._execute({**self.params, "limit": 1, "offset": 0})
        self.results = results
        return results[0] if results else None

    async def _execute(self, params: dict[str, Any]) -> tuple[ResponseData, list[Any]]:
        config = self.config
        url = build_url(config.keys, self.descriptor, params, base_url=config.base_url)
        self.url = url

        if config.on_request is not None:
            await _call_hook(config.on_request, url, self.endpoint, dict(params))

        logger.debug("Sending request", extra=self._log_context())
        response = await self._factory.transport.request(url)
        raw_results = response.results

        if config.validation.check_results:
            self.validated.results = self._factory.validator.validate(raw_results, self.descriptor)

        hook = config.result_hook(self.type)
        if hook is not None:
            await _call_hook(hook, raw_results)

        if config.auto_query:
            engine = AutoQuery(self._factory, self.descriptor)
            results = engine.inject(raw_results)
            if config.validation.check_auto_query:
                self.validated.auto_query = engine.valid
        else:
            results = list(raw_results)

        self.metadata = response.metadata
        self.response_data = response.data
        return response.data, results
