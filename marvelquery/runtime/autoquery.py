"""AutoQuery: rewrite embedded references into fetchable sub-queries.

Architecture:
    API results embed two kinds of links to other resources:

    - a Summary ``{resourceURI, name}`` pointing at one resource
    - a List ``{available, returned, collectionURI, items}`` pointing at a
      paginated sub-collection

    The engine walks each result field by field. ``RELATIONSHIPS`` says which
    resource type a field references and ``reference_kind`` says what shape
    the value has; together they decide how the field is rewritten:

        RESOURCE        -> ExtendedResource at (referenced_type, id)
        COLLECTION      -> ExtendedCollection at the collectionURI endpoint,
                           each item an ExtendedResource of its semantic type
        RESOURCE_ARRAY  -> list of ExtendedResource (e.g. comic ``variants``)
        NONE            -> copied unchanged

    The result itself becomes an ExtendedResource at its own endpoint, so
    ``character.query("comics")`` works on every top-level item.

Design Decisions:
    - Factory injection: the engine receives a callable that builds new
      queries and never imports the query class, which would otherwise import
      this module back
    - Extended values are dict subclasses so they still serialize, compare
      and index like the raw API data; the only added key is ``endpoint``
    - Anything that already has an ``endpoint`` key is passed through as-is,
      so extending twice is harmless
    - Raw results are deep-copied, never modified in place
    - Best effort: an unparseable URI leaves that field unextended, emits
      AutoQueryExtensionWarning and marks the engine invalid

See Also:
    - RELATIONSHIPS: Field-to-type mapping per resource type
    - MarvelQuery: Records ``engine.valid`` as ``validated.auto_query``
"""

from __future__ import annotations

import copy
import logging
import warnings
from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from ..core.endpoint import (
    Endpoint,
    EndpointDescriptor,
    endpoint_from_uri,
    format_endpoint,
    id_from_uri,
    type_from_endpoint,
    validate_endpoint,
)
from ..core.enums import ReferenceKind, ResourceType
from ..core.exceptions import AutoQueryExtensionWarning, InvalidEndpoint
from ..core.relationships import reference_kind, referenced_type
from ..models.results import display_name

if TYPE_CHECKING:
    from ..api.query import MarvelQuery

logger = logging.getLogger(__name__)

QueryFactory = Callable[..., "MarvelQuery"]

ENDPOINT_KEY = "endpoint"


def is_extended(value: Any) -> bool:
    """True for values that already carry an endpoint."""
    return isinstance(value, Mapping) and ENDPOINT_KEY in value


def _is_unresolved_reference(value: Any) -> bool:
    """True for reference shapes whose URI is missing, empty or not a string."""
    if isinstance(value, Mapping):
        return "collectionURI" in value or "resourceURI" in value
    if isinstance(value, list) and value:
        return all(isinstance(item, Mapping) and "resourceURI" in item for item in value)
    return False


class _Extended(dict):
    """Raw API mapping plus an ``endpoint`` key and a query factory."""

    def __init__(self, data: Mapping[str, Any], endpoint: Endpoint, factory: QueryFactory) -> None:
        super().__init__(data)
        self[ENDPOINT_KEY] = endpoint
        self._factory = factory

    @property
    def endpoint(self) -> Endpoint:
        return self[ENDPOINT_KEY]

    def __deepcopy__(self, memo: dict[int, Any]) -> _Extended:
        data = {key: copy.deepcopy(value, memo) for key, value in self.items()}
        return type(self)(data, self.endpoint, self._factory)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"


class ExtendedResource(_Extended):
    """A single resource reference that can be fetched or queried further.

    Example:
        >>> spider_man = results[0]
        >>> spider_man.endpoint
        ('characters', 1009610)
        >>> comics = await spider_man.query("comics", {"format": "comic"}).fetch()
    """

    async def fetch(self) -> MarvelQuery:
        """Fetch this resource and return the completed query."""
        return await self._factory(self.endpoint).fetch()

    async def fetch_single(self) -> dict[str, Any] | None:
        """Fetch this resource and return just the (extended) item."""
        return await self._factory(self.endpoint).fetch_single()

    def query(
        self, resource_type: ResourceType | str, params: Mapping[str, Any] | None = None
    ) -> MarvelQuery:
        """Build an unfetched query for a sub-collection of this resource.

        Raises:
            InvalidEndpoint: If ``resource_type`` is unknown or equals the
                resource's own type
        """
        base_type, resource_id = self.endpoint[0], self.endpoint[1]
        descriptor = validate_endpoint((base_type, resource_id, resource_type))
        return self._factory(descriptor.path, params)


class ExtendedCollection(_Extended):
    """A sub-collection reference whose ``items`` are ExtendedResources."""

    def query(self, params: Mapping[str, Any] | None = None) -> MarvelQuery:
        """Build an unfetched query for the whole collection."""
        return self._factory(self.endpoint, params)


def sort_endpoints(endpoints: Iterable[Endpoint]) -> list[Endpoint]:
    """Deduplicate and sort endpoints by type, then id, then sub type.

    Shorter endpoints sort before longer ones sharing the same prefix.
    """

    def key(endpoint: Endpoint) -> tuple[str, int, str]:
        resource_id = endpoint[1] if len(endpoint) > 1 else -1
        sub_type = str(endpoint[2]) if len(endpoint) > 2 else ""
        return (str(endpoint[0]), resource_id, sub_type)

    unique = {tuple(str(part) for part in endpoint): endpoint for endpoint in endpoints}
    return sorted(unique.values(), key=key)


class AutoQuery:
    """Extends results fetched from one endpoint.

    A new engine is created for every fetch; ``valid`` reports whether every
    reference it encountered could be resolved.
    """

    def __init__(self, factory: QueryFactory, descriptor: EndpointDescriptor) -> None:
        self.factory = factory
        self.descriptor = descriptor
        self.valid = True
        self.resources: dict[ResourceType, list[Endpoint]] = defaultdict(list)
        self.collections: dict[ResourceType, list[Endpoint]] = defaultdict(list)
        self.names: dict[Endpoint, str] = {}

    def inject(self, results: Iterable[Any]) -> list[Any]:
        """Extend every result and log an injection summary."""
        logger.debug(f"Starting AutoQuery injection for {self.descriptor}")
        extended = [self.extend(result) for result in results]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(self.summary())
        return extended

    def extend(self, result: Any) -> Any:
        """Extend one top-level result of this engine's semantic type."""
        if is_extended(result) or not isinstance(result, Mapping):
            return result

        parent_name = display_name(result)
        fields: dict[str, Any] = {}
        for key, value in result.items():
            target = referenced_type(self.descriptor.type, key)
            if target is None:
                fields[key] = copy.deepcopy(value)
            else:
                fields[key] = self._extend_field(value, target, parent_name)

        endpoint = self._own_endpoint(result)
        if endpoint is None:
            return fields
        return ExtendedResource(fields, endpoint, self.factory)

    def _own_endpoint(self, result: Mapping[str, Any]) -> Endpoint | None:
        uri = result.get("resourceURI")
        if uri:
            try:
                endpoint = endpoint_from_uri(uri)
            except InvalidEndpoint:
                endpoint = None
            if endpoint is not None and len(endpoint) == 2:
                return endpoint

        resource_id = result.get("id")
        if isinstance(resource_id, int) and not isinstance(resource_id, bool):
            return (self.descriptor.type, resource_id)

        self._fail(f"Could not determine endpoint of result: {uri!r}")
        return None

    def _extend_field(self, value: Any, target: ResourceType, parent_name: str) -> Any:
        if is_extended(value):
            return value

        kind = reference_kind(value)
        if kind is ReferenceKind.COLLECTION:
            return self._extend_collection(value, target, parent_name)
        if kind is ReferenceKind.RESOURCE:
            return self._extend_resource(value, target)
        if kind is ReferenceKind.RESOURCE_ARRAY:
            return [self._extend_resource(item, target) for item in value]
        if _is_unresolved_reference(value):
            self._fail(f"Reference to {target} has no usable URI: {value!r}")
        return copy.deepcopy(value)

    def _extend_resource(self, value: Any, resource_type: ResourceType) -> Any:
        if is_extended(value):
            return value
        if not isinstance(value, Mapping):
            return copy.deepcopy(value)

        uri = value.get("resourceURI")
        try:
            endpoint: Endpoint = (resource_type, id_from_uri(uri))
        except InvalidEndpoint:
            self._fail(f"Failed to determine resource endpoint from URI: {uri!r}")
            return copy.deepcopy(value)

        self.resources[resource_type].append(endpoint)
        self.names[endpoint] = display_name(value)
        return ExtendedResource(copy.deepcopy(dict(value)), endpoint, self.factory)

    def _extend_collection(
        self, value: Mapping[str, Any], target: ResourceType, parent_name: str
    ) -> Any:
        uri = value.get("collectionURI")
        try:
            endpoint = endpoint_from_uri(uri)
        except InvalidEndpoint:
            self._fail(f"Failed to determine collection endpoint from URI: {uri!r}")
            return copy.deepcopy(value)

        self.collections[target].append(endpoint)
        if parent_name:
            self.names[endpoint] = parent_name

        item_type = type_from_endpoint(endpoint)
        data = {key: copy.deepcopy(item) for key, item in value.items() if key != "items"}
        data["items"] = [self._extend_resource(item, item_type) for item in value.get("items") or []]
        return ExtendedCollection(data, endpoint, self.factory)

    def _fail(self, message: str) -> None:
        self.valid = False
        logger.warning(message, extra={"endpoint": str(self.descriptor)})
        warnings.warn(message, AutoQueryExtensionWarning, stacklevel=2)

    def summary(self) -> str:
        """Multi-line report of every resource and collection extended."""

        def counts(table: Mapping[ResourceType, list[Endpoint]]) -> str:
            return ", ".join(f"{kind}: {len(items)}" for kind, items in table.items() if items)

        def listing(table: Mapping[ResourceType, list[Endpoint]], unknown: str) -> str:
            endpoints = sort_endpoints(e for items in table.values() for e in items)
            return "\n".join(
                f"{format_endpoint(e)} - {self.names.get(e) or unknown}" for e in endpoints
            )

        total_collections = sum(len(items) for items in self.collections.values())
        total_resources = sum(len(items) for items in self.resources.values())
        rule = "=" * 65
        return "\n".join(
            [
                "AutoQuery Injection Summary",
                rule,
                f" Total Collections Processed: {total_collections}",
                f" {counts(self.collections)}",
                "-" * 65,
                f" Total Resources Processed: {total_resources}",
                f" {counts(self.resources)}",
                rule,
                "Resources:",
                listing(self.resources, "Unknown Resource"),
                "Collections:",
                listing(self.collections, "Unknown Collection"),
            ]
        )

