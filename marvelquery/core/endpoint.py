"""Endpoint model: resource paths and their semantic type.

Architecture:
    An endpoint is an ordered tuple of one to three segments::

        (base_type,)                  -> ("characters",)
        (base_type, id)               -> ("characters", 1009491)
        (base_type, id, sub_type)     -> ("characters", 1009491, "comics")

    Type segments are normalized to ResourceType members. Because ResourceType
    is a string enum, a normalized endpoint still compares equal to a tuple of
    plain strings, which keeps call sites free to use either form.

    The semantic type of an endpoint is the type of the resources it returns:
    the sub type when present, otherwise the base type.

See Also:
    - RELATIONSHIPS: Maps result fields to the resource types they reference
    - AutoQuery: Builds endpoints from resource and collection URIs
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

from .enums import ResourceType
from .exceptions import InvalidEndpoint

Endpoint = tuple
EndpointLike = Union[str, ResourceType, Sequence[Any]]

# Everything up to and including "/public/" in an API URI
_PUBLIC_PREFIX = re.compile(r"^.*?/public/")


@dataclass(frozen=True)
class EndpointDescriptor:
    """Validated endpoint path and the resource type it returns."""

    path: Endpoint
    type: ResourceType

    def __str__(self) -> str:
        return format_endpoint(self.path)


def _as_segments(endpoint: EndpointLike) -> list[Any]:
    if isinstance(endpoint, str):
        return [endpoint]
    if isinstance(endpoint, Sequence):
        segments = list(endpoint)
        # URI parsing and optional sub types can leave trailing gaps
        while segments and segments[-1] is None:
            segments.pop()
        return segments
    raise InvalidEndpoint(f"Endpoint must be a type or a sequence, got {endpoint!r}", endpoint)


def _resource_type(segment: Any, endpoint: Any) -> ResourceType:
    resource_type = ResourceType.from_str(segment) if isinstance(segment, str) else None
    if resource_type is None:
        raise InvalidEndpoint(f"Unknown endpoint type: {segment!r}", endpoint)
    return resource_type


def _resource_id(segment: Any, endpoint: Any) -> int:
    if isinstance(segment, bool) or not isinstance(segment, int):
        raise InvalidEndpoint(f"Invalid endpoint id: {segment!r}", endpoint)
    return segment


def validate_endpoint(endpoint: EndpointLike) -> EndpointDescriptor:
    """Validate an endpoint and derive its descriptor.

    Args:
        endpoint: Endpoint tuple/list, or a bare resource type as shorthand
            for a one-segment endpoint

    Returns:
        EndpointDescriptor with a normalized path and its semantic type

    Raises:
        InvalidEndpoint: If the endpoint is empty, longer than three segments,
            has an unknown type, a non-numeric id, a sub type without an id,
            or the same base and sub type
    """
    if endpoint is None:
        raise InvalidEndpoint("Endpoint is required", endpoint)

    segments = _as_segments(endpoint)
    if not segments:
        raise InvalidEndpoint("Endpoint is required", endpoint)
    if len(segments) > 3:
        raise InvalidEndpoint(
            f"Endpoint has {len(segments)} segments, expected at most 3", endpoint
        )

    path: list[Any] = [_resource_type(segments[0], endpoint)]
    if len(segments) >= 2:
        path.append(_resource_id(segments[1], endpoint))
    if len(segments) == 3:
        sub_type = _resource_type(segments[2], endpoint)
        if sub_type == path[0]:
            raise InvalidEndpoint(
                f"Invalid endpoint: {path[0]} and {sub_type} cannot be the same type",
                endpoint,
            )
        path.append(sub_type)

    normalized = tuple(path)
    return EndpointDescriptor(path=normalized, type=type_from_endpoint(normalized))


def type_from_endpoint(endpoint: Endpoint) -> ResourceType:
    """Semantic type of an endpoint: sub type if present, else base type."""
    segment = endpoint[2] if len(endpoint) == 3 else endpoint[0]
    return ResourceType(segment)


def format_endpoint(endpoint: Endpoint) -> str:
    """Join endpoint segments with '/' (e.g. 'characters/1009491/comics')."""
    return "/".join(str(segment) for segment in endpoint)


def _uri_parts(uri: Any) -> list[str]:
    if not isinstance(uri, str) or not uri:
        raise InvalidEndpoint(f"Invalid URI: {uri!r}", uri)
    cleaned = _PUBLIC_PREFIX.sub("", uri, count=1).split("?", 1)[0]
    return [part for part in cleaned.split("/") if part]


def id_from_uri(uri: str) -> int:
    """Extract the trailing numeric id of a resource URI.

    Example:
        >>> id_from_uri("http://gateway.marvel.com/v1/public/characters/1009491")
        1009491

    Raises:
        InvalidEndpoint: If the URI is empty or its last segment is not numeric
    """
    parts = _uri_parts(uri)
    if not parts or not parts[-1].isdigit():
        raise InvalidEndpoint(f"No numeric id in URI: {uri!r}", uri)
    return int(parts[-1])


def endpoint_from_uri(uri: str) -> Endpoint:
    """Build a validated endpoint from a resource or collection URI.

    Example:
        >>> endpoint_from_uri("http://gateway.marvel.com/v1/public/characters/1009491/comics")
        (<ResourceType.CHARACTERS: 'characters'>, 1009491, <ResourceType.COMICS: 'comics'>)

    Raises:
        InvalidEndpoint: If the URI does not encode a valid endpoint
    """
    parts = _uri_parts(uri)
    segments: list[Any] = list(parts)
    if len(segments) >= 2:
        if not segments[1].isdigit():
            raise InvalidEndpoint(f"Invalid id in URI: {uri!r}", uri)
        segments[1] = int(segments[1])
    return validate_endpoint(segments).path
