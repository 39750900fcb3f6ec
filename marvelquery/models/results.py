"""Result schemas for each resource type.

These models describe the exact structure the Marvel API returns so that
responses can be checked item by item. Results are validated against them but
handed to callers as the raw mappings, so a schema mismatch never loses data.

Building blocks:
    - Summary: ``{resourceURI, name}`` pointing at a single resource
    - ResourceList: ``{available, returned, collectionURI, items: [Summary]}``
      pointing at a paginated sub-collection
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

MIN_YEAR = 1939

URI = Annotated[str, StringConstraints(pattern=r"^https?://\S+$")]
# Event start/end dates use a different format than every other date field
EventDateTime = Annotated[str, StringConstraints(pattern=r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")]


def max_year() -> int:
    """Latest plausible year; the catalogue lists issues a few months ahead."""
    return date.today().year + 5


class _Schema(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TextObject(_Schema):
    type: str
    language: str
    text: str


class Link(_Schema):
    type: str
    url: URI


class Image(_Schema):
    path: str
    extension: str


class ComicDate(_Schema):
    type: str
    date: str


class ComicPrice(_Schema):
    type: str
    price: float


class Summary(_Schema):
    """Reference to a single related resource."""

    resource_uri: URI = Field(..., alias="resourceURI")
    name: str


class RoleSummary(Summary):
    role: str | None = None


class TypeSummary(Summary):
    type: str


class ResourceList(_Schema):
    """Reference to a collection of related resources."""

    available: int = Field(..., ge=0)
    returned: int = Field(..., ge=0)
    collection_uri: URI = Field(..., alias="collectionURI")
    items: list[Summary]


class RoleResourceList(ResourceList):
    items: list[RoleSummary]


class TypeResourceList(ResourceList):
    items: list[TypeSummary]


class MarvelResult(_Schema):
    """Fields shared by every resource type."""

    id: int
    modified: str
    resource_uri: URI = Field(..., alias="resourceURI")
    thumbnail: Image | None = None


class Comic(MarvelResult):
    digital_id: int | None = Field(None, alias="digitalId")
    title: str
    issue_number: float = Field(0, alias="issueNumber")
    variant_description: str | None = Field(None, alias="variantDescription")
    description: str | None = None
    isbn: str | None = None
    upc: str | None = None
    diamond_code: str | None = Field(None, alias="diamondCode")
    ean: str | None = None
    issn: str | None = None
    format: str | None = None
    page_count: int = Field(0, alias="pageCount")
    text_objects: list[TextObject] = Field(..., alias="textObjects")
    series: Summary
    variants: list[Summary]
    collections: list[Summary]
    collected_issues: list[Summary] = Field(..., alias="collectedIssues")
    dates: list[ComicDate]
    prices: list[ComicPrice]
    urls: list[Link] | None = None
    images: list[Image]
    creators: RoleResourceList
    characters: RoleResourceList
    stories: TypeResourceList
    events: ResourceList


class Event(MarvelResult):
    title: str
    description: str | None = None
    start: EventDateTime | None = None
    end: EventDateTime | None = None
    urls: list[Link] | None = None
    comics: ResourceList
    stories: TypeResourceList
    series: ResourceList
    characters: RoleResourceList
    creators: RoleResourceList
    next: Summary | None = None
    previous: Summary | None = None


class Series(MarvelResult):
    title: str
    description: str | None = None
    start_year: int = Field(..., alias="startYear", ge=MIN_YEAR)
    # 2099 marks an ongoing series
    end_year: int = Field(..., alias="endYear", ge=MIN_YEAR, le=2099)
    rating: str
    urls: list[Link] | None = None
    comics: ResourceList
    stories: TypeResourceList
    events: ResourceList
    characters: RoleResourceList
    creators: RoleResourceList
    next: Summary | None = None
    previous: Summary | None = None


class Creator(MarvelResult):
    first_name: str = Field(..., alias="firstName")
    middle_name: str | None = Field(None, alias="middleName")
    last_name: str | int = Field(..., alias="lastName")
    suffix: str | None = None
    full_name: str = Field(..., alias="fullName")
    urls: list[Link] | None = None
    series: ResourceList
    stories: TypeResourceList
    comics: ResourceList
    events: ResourceList


class Character(MarvelResult):
    name: str
    description: str | None = None
    urls: list[Link] | None = None
    comics: ResourceList
    stories: TypeResourceList
    events: ResourceList
    series: ResourceList


class Story(MarvelResult):
    title: str
    description: str | None = None
    type: str | None = None
    comics: ResourceList
    series: ResourceList
    events: ResourceList
    characters: RoleResourceList
    creators: RoleResourceList
    original_issue: Summary | None = Field(None, alias="originalIssue")


def display_name(resource: Any) -> str:
    """Human-readable name of a resource or summary, '' when none is present."""
    if not isinstance(resource, dict):
        return ""
    for key in ("name", "title", "fullName"):
        value = resource.get(key)
        if isinstance(value, str) and value:
            return value
    return ""
