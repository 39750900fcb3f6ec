"""Type-relationship table for result fields.

Architecture:
    Results embed references to other resources, but the field name alone
    decides which resource type is referenced (a comic's ``series`` field
    points at ``series``, its ``variants`` at other ``comics``). This table
    records that mapping explicitly::

        RELATIONSHIPS[resource_type][field_name] -> referenced ResourceType

    The AutoQuery engine consults it together with ``reference_kind`` to
    decide how each field is rewritten.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .enums import ReferenceKind, ResourceType

_C = ResourceType

RELATIONSHIPS: Mapping[ResourceType, Mapping[str, ResourceType]] = MappingProxyType(
    {
        _C.COMICS: MappingProxyType(
            {
                "series": _C.SERIES,
                "variants": _C.COMICS,
                "collections": _C.COMICS,
                "collectedIssues": _C.COMICS,
                "creators": _C.CREATORS,
                "characters": _C.CHARACTERS,
                "stories": _C.STORIES,
                "events": _C.EVENTS,
            }
        ),
        _C.EVENTS: MappingProxyType(
            {
                "comics": _C.COMICS,
                "stories": _C.STORIES,
                "series": _C.SERIES,
                "characters": _C.CHARACTERS,
                "creators": _C.CREATORS,
                "next": _C.EVENTS,
                "previous": _C.EVENTS,
            }
        ),
        _C.SERIES: MappingProxyType(
            {
                "comics": _C.COMICS,
                "stories": _C.STORIES,
                "events": _C.EVENTS,
                "characters": _C.CHARACTERS,
                "creators": _C.CREATORS,
                "next": _C.SERIES,
                "previous": _C.SERIES,
            }
        ),
        _C.CREATORS: MappingProxyType(
            {
                "series": _C.SERIES,
                "stories": _C.STORIES,
                "comics": _C.COMICS,
                "events": _C.EVENTS,
            }
        ),
        _C.CHARACTERS: MappingProxyType(
            {
                "comics": _C.COMICS,
                "stories": _C.STORIES,
                "events": _C.EVENTS,
                "series": _C.SERIES,
            }
        ),
        _C.STORIES: MappingProxyType(
            {
                "comics": _C.COMICS,
                "series": _C.SERIES,
                "events": _C.EVENTS,
                "characters": _C.CHARACTERS,
                "creators": _C.CREATORS,
                "originalIssue": _C.COMICS,
            }
        ),
    }
)


def referenced_type(resource_type: ResourceType, field: str) -> ResourceType | None:
    """Resource type referenced by ``field`` of a ``resource_type`` result."""
    return RELATIONSHIPS.get(resource_type, {}).get(field)


def _has_uri(value: Any, key: str) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get(key), str) and bool(value[key])


def reference_kind(value: Any) -> ReferenceKind:
    """Classify how ``value`` references other resources.

    List shapes never carry a ``resourceURI`` of their own. Summary arrays
    are homogeneous, so an array is classified by its first element.
    """
    if _has_uri(value, "collectionURI"):
        return ReferenceKind.COLLECTION
    if _has_uri(value, "resourceURI"):
        return ReferenceKind.RESOURCE
    if isinstance(value, list) and value and _has_uri(value[0], "resourceURI"):
        return ReferenceKind.RESOURCE_ARRAY
    return ReferenceKind.NONE
