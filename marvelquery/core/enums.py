"""Core enumerations shared across the library.

Architecture:
    The Marvel API exposes a closed set of six resource types. Every endpoint
    segment, relationship entry and schema lookup is keyed by one of them, so
    they live in a single string enum that compares equal to the raw API
    strings ("comics", "characters", ...).

Key Types:
    - ResourceType: The queryable resource types
    - ReferenceKind: How a field of a result points at other resources
"""

from enum import Enum
from typing import Optional


class ResourceType(str, Enum):
    """Resource types that can be queried.

    String enum so that ``ResourceType.COMICS == "comics"`` and endpoint
    tuples built from enum members compare equal to tuples of plain strings.
    """

    COMICS = "comics"
    CHARACTERS = "characters"
    CREATORS = "creators"
    EVENTS = "events"
    SERIES = "series"
    STORIES = "stories"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value

    @classmethod
    def from_str(cls, value: str) -> Optional["ResourceType"]:
        """Get resource type from string value. Returns None if no match."""
        try:
            return cls(value)
        except ValueError:
            return None


class ReferenceKind(Enum):
    """Shape of a result field that references other resources.

    - NONE: scalar or unrelated value, passed through untouched
    - RESOURCE: a Summary carrying a ``resourceURI``
    - COLLECTION: a List carrying a ``collectionURI`` and summary ``items``
    - RESOURCE_ARRAY: a plain array of Summaries (e.g. ``variants``)
    """

    NONE = "none"
    RESOURCE = "resource"
    COLLECTION = "collection"
    RESOURCE_ARRAY = "resource_array"
