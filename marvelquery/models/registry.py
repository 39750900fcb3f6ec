"""Schema registry: parameter and result models per resource type.

Architecture:
    Validation is a capability plugged into the query engine rather than a
    hard-wired dependency. The engine only asks the registry two questions:

        registry.params_model(resource_type)  -> pydantic model for params
        registry.result_model(resource_type)  -> pydantic model for results

    ``default_registry()`` maps every resource type to the bundled models.
    Callers can register replacements (or a partial registry) through
    ``init(..., schemas=...)``.

Design Decisions:
    - Frozen mappings: a registry handed to ``init`` cannot change underneath
      running queries; ``with_schemas`` returns a modified copy instead
    - Missing entries raise SchemaNotFound so a partial registry fails loudly
      at the point of use
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from pydantic import BaseModel

from ..core.enums import ResourceType
from ..core.exceptions import SchemaNotFound
from .params import (
    CharacterParams,
    ComicParams,
    CreatorParams,
    EventParams,
    SeriesParams,
    StoryParams,
)
from .results import Character, Comic, Creator, Event, Series, Story

ModelType = type[BaseModel]


@dataclass(frozen=True)
class SchemaRegistry:
    """Parameter and result models keyed by resource type."""

    params: Mapping[ResourceType, ModelType] = field(default_factory=dict)
    results: Mapping[ResourceType, ModelType] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(_keyed(self.params)))
        object.__setattr__(self, "results", MappingProxyType(_keyed(self.results)))

    def params_model(self, resource_type: ResourceType | str) -> ModelType:
        """Parameter model for a resource type.

        Raises:
            SchemaNotFound: If no parameter model is registered for the type
        """
        return self._lookup(self.params, resource_type, "parameter")

    def result_model(self, resource_type: ResourceType | str) -> ModelType:
        """Result model for a resource type.

        Raises:
            SchemaNotFound: If no result model is registered for the type
        """
        return self._lookup(self.results, resource_type, "result")

    def with_schemas(
        self,
        resource_type: ResourceType | str,
        *,
        params: ModelType | None = None,
        result: ModelType | None = None,
    ) -> SchemaRegistry:
        """Copy of this registry with the models for one type replaced."""
        key = ResourceType(resource_type)
        new_params = dict(self.params)
        new_results = dict(self.results)
        if params is not None:
            new_params[key] = params
        if result is not None:
            new_results[key] = result
        return replace(self, params=new_params, results=new_results)

    @staticmethod
    def _lookup(
        table: Mapping[ResourceType, ModelType], resource_type: ResourceType | str, kind: str
    ) -> ModelType:
        model = table.get(ResourceType(resource_type))
        if model is None:
            raise SchemaNotFound(f"No {kind} schema registered for type: {resource_type}")
        return model


def _keyed(table: Mapping[ResourceType | str, ModelType]) -> dict[ResourceType, ModelType]:
    return {ResourceType(key): model for key, model in table.items()}


def default_registry() -> SchemaRegistry:
    """Registry holding the bundled models for all six resource types."""
    return SchemaRegistry(
        params={
            ResourceType.COMICS: ComicParams,
            ResourceType.CHARACTERS: CharacterParams,
            ResourceType.CREATORS: CreatorParams,
            ResourceType.EVENTS: EventParams,
            ResourceType.SERIES: SeriesParams,
            ResourceType.STORIES: StoryParams,
        },
        results={
            ResourceType.COMICS: Comic,
            ResourceType.CHARACTERS: Character,
            ResourceType.CREATORS: Creator,
            ResourceType.EVENTS: Event,
            ResourceType.SERIES: Series,
            ResourceType.STORIES: Story,
        },
    )
