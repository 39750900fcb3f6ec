"""Pydantic models for the API envelope, results and query parameters."""

from .envelope import APIResponse, Metadata, ResponseData
from .params import (
    BaseParams,
    CharacterParams,
    ComicParams,
    CreatorParams,
    EventParams,
    SeriesParams,
    StoryParams,
)
from .registry import SchemaRegistry, default_registry
from .results import (
    Character,
    Comic,
    Creator,
    Event,
    MarvelResult,
    ResourceList,
    Series,
    Story,
    Summary,
    display_name,
)

__all__ = [
    # Envelope
    "APIResponse",
    "Metadata",
    "ResponseData",
    # Parameters
    "BaseParams",
    "CharacterParams",
    "ComicParams",
    "CreatorParams",
    "EventParams",
    "SeriesParams",
    "StoryParams",
    # Results
    "Character",
    "Comic",
    "Creator",
    "Event",
    "MarvelResult",
    "ResourceList",
    "Series",
    "Story",
    "Summary",
    "display_name",
    # Registry
    "SchemaRegistry",
    "default_registry",
]
