"""Query parameter schemas for each resource type.

Architecture:
    Field names are snake_case with the API's camelCase names as aliases, and
    ``populate_by_name`` lets callers use either spelling. Validated output is
    dumped by alias so the wire format always uses the API's names.

    Several fields accept friendlier Python values and normalize them to the
    string the API expects:

    - id lists: ``1009491`` or ``[1009491, 1009610]`` -> ``"1009491,1009610"``
    - dates: ``date``/``datetime``/ISO strings -> ISO-8601 strings
    - date ranges: two dates -> ``"2024-01-01,2024-02-01"``
    - orderBy: ``"-modified"`` or ``["name", "-modified"]`` -> comma list

    Unknown parameters are rejected (``extra="forbid"``).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints

from ..core.enums import ResourceType
from .results import MIN_YEAR, max_year

MAX_LIMIT = 100

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_8601 = r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}(:\d{2})?(Z|[+-]\d{2}:?\d{2})?)?$"

ORDER_BY_VALUES: dict[ResourceType, tuple[str, ...]] = {
    ResourceType.COMICS: ("focDate", "onsaleDate", "title", "issueNumber", "modified"),
    ResourceType.CHARACTERS: ("name", "modified"),
    ResourceType.CREATORS: ("lastName", "firstName", "middleName", "suffix", "modified"),
    ResourceType.EVENTS: ("name", "startDate", "modified"),
    ResourceType.SERIES: ("title", "modified", "startYear"),
    ResourceType.STORIES: ("id", "modified"),
}

FORMATS: tuple[str, ...] = (
    "comic",
    "magazine",
    "trade paperback",
    "hardcover",
    "digest",
    "graphic novel",
    "digital comic",
    "infinite comic",
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _id_list(value: Any) -> Any:
    if _is_int(value):
        return str(value)
    if isinstance(value, (list, tuple)) and value and all(_is_int(v) for v in value):
        return ",".join(str(v) for v in value)
    return value


def _iso_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    return value


def _date_range(value: Any) -> Any:
    if not isinstance(value, (list, tuple)):
        return value
    if len(value) != 2:
        raise ValueError("dateRange requires exactly two dates (start and end)")
    dates = []
    for item in value:
        if isinstance(item, datetime):
            item = item.date()
        dates.append(item.isoformat() if isinstance(item, date) else item)
    for item in dates:
        if not isinstance(item, str) or not _ISO_DATE.match(item):
            raise ValueError(f"Invalid date in dateRange: {item!r}, expected YYYY-MM-DD")
    return ",".join(dates)


def _select(allowed: Sequence[str], *, descending: bool = False) -> Callable[[Any], str]:
    """Validator for one or several values from ``allowed``, comma-joined."""
    options = set(allowed)
    if descending:
        options |= {f"-{value}" for value in allowed}

    def check(value: Any) -> str:
        values = [value] if isinstance(value, str) else value
        if not isinstance(values, (list, tuple)) or not values:
            raise ValueError("Expected a value or a list of values")
        for item in values:
            if item not in options:
                raise ValueError(f"Invalid value {item!r}, expected one of: {', '.join(sorted(options))}")
        return ",".join(values)

    return check


def _year(value: int) -> int:
    if not MIN_YEAR <= value <= max_year():
        raise ValueError(f"Year must be between {MIN_YEAR} and {max_year()}")
    return value


def _order_by(resource_type: ResourceType) -> Any:
    return Annotated[str, BeforeValidator(_select(ORDER_BY_VALUES[resource_type], descending=True))]


IDList = Annotated[str, BeforeValidator(_id_list), StringConstraints(pattern=r"^\d+(,\d+)*$")]
ISODate = Annotated[str, BeforeValidator(_iso_date), StringConstraints(pattern=_ISO_8601)]
DateRange = Annotated[str, BeforeValidator(_date_range)]
Year = Annotated[int, AfterValidator(_year)]
Formats = Annotated[str, BeforeValidator(_select(FORMATS))]

ComicOrderBy = _order_by(ResourceType.COMICS)
CharacterOrderBy = _order_by(ResourceType.CHARACTERS)
CreatorOrderBy = _order_by(ResourceType.CREATORS)
EventOrderBy = _order_by(ResourceType.EVENTS)
SeriesOrderBy = _order_by(ResourceType.SERIES)
StoryOrderBy = _order_by(ResourceType.STORIES)


class BaseParams(BaseModel):
    """Parameters accepted by every endpoint."""

    modified_since: ISODate | None = Field(None, alias="modifiedSince")
    limit: int = Field(MAX_LIMIT, gt=0, le=MAX_LIMIT)
    offset: int = Field(0, ge=0)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class CharacterParams(BaseParams):
    name: str | None = None
    name_starts_with: str | None = Field(None, alias="nameStartsWith")
    comics: IDList | None = None
    series: IDList | None = None
    events: IDList | None = None
    stories: IDList | None = None
    order_by: CharacterOrderBy | None = Field(None, alias="orderBy")


class ComicParams(BaseParams):
    format: Formats | None = None
    format_type: Literal["comic", "collection"] | None = Field(None, alias="formatType")
    no_variants: bool | None = Field(None, alias="noVariants")
    date_descriptor: Literal["lastWeek", "thisWeek", "nextWeek", "thisMonth"] | None = Field(
        None, alias="dateDescriptor"
    )
    date_range: DateRange | None = Field(None, alias="dateRange")
    title: str | None = None
    title_starts_with: str | None = Field(None, alias="titleStartsWith")
    start_year: Year | None = Field(None, alias="startYear")
    issue_number: int | None = Field(None, alias="issueNumber", ge=0)
    diamond_code: str | None = Field(None, alias="diamondCode")
    digital_id: int | None = Field(None, alias="digitalId")
    upc: str | None = None
    isbn: str | None = None
    ean: str | None = None
    issn: str | None = None
    has_digital_issue: bool | None = Field(None, alias="hasDigitalIssue")
    creators: IDList | None = None
    characters: IDList | None = None
    series: IDList | None = None
    events: IDList | None = None
    stories: IDList | None = None
    shared_appearances: IDList | None = Field(None, alias="sharedAppearances")
    collaborators: IDList | None = None
    order_by: ComicOrderBy | None = Field(None, alias="orderBy")


class CreatorParams(BaseParams):
    first_name: str | None = Field(None, alias="firstName")
    middle_name: str | None = Field(None, alias="middleName")
    last_name: str | None = Field(None, alias="lastName")
    suffix: str | None = None
    name_starts_with: str | None = Field(None, alias="nameStartsWith")
    first_name_starts_with: str | None = Field(None, alias="firstNameStartsWith")
    middle_name_starts_with: str | None = Field(None, alias="middleNameStartsWith")
    last_name_starts_with: str | None = Field(None, alias="lastNameStartsWith")
    comics: IDList | None = None
    series: IDList | None = None
    events: IDList | None = None
    stories: IDList | None = None
    order_by: CreatorOrderBy | None = Field(None, alias="orderBy")


class EventParams(BaseParams):
    name: str | None = None
    name_starts_with: str | None = Field(None, alias="nameStartsWith")
    creators: IDList | None = None
    characters: IDList | None = None
    series: IDList | None = None
    comics: IDList | None = None
    stories: IDList | None = None
    order_by: EventOrderBy | None = Field(None, alias="orderBy")


class SeriesParams(BaseParams):
    title: str | None = None
    title_starts_with: str | None = Field(None, alias="titleStartsWith")
    start_year: Year | None = Field(None, alias="startYear")
    comics: IDList | None = None
    stories: IDList | None = None
    events: IDList | None = None
    creators: IDList | None = None
    characters: IDList | None = None
    series_type: Literal["collection", "one shot", "limited", "ongoing"] | None = Field(
        None, alias="seriesType"
    )
    contains: Formats | None = None
    order_by: SeriesOrderBy | None = Field(None, alias="orderBy")


class StoryParams(BaseParams):
    comics: IDList | None = None
    series: IDList | None = None
    events: IDList | None = None
    creators: IDList | None = None
    characters: IDList | None = None
    order_by: StoryOrderBy | None = Field(None, alias="orderBy")
