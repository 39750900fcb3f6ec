"""Shared fixtures: realistic API payloads and an in-memory HTTP client."""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import AsyncMock

import pytest

from marvelquery import QueryFactory, init

BASE = "http://gateway.marvel.com/v1/public"

PUBLIC_KEY = "test-public"
PRIVATE_KEY = "test-private"

PETER_PARKER: dict[str, Any] = {
    "id": 1009491,
    "name": "Peter Parker",
    "description": "",
    "modified": "2013-07-01T16:44:00-0400",
    "thumbnail": {
        "path": "http://i.annihil.us/u/prod/marvel/i/mg/3/20/5232158de5b16",
        "extension": "jpg",
    },
    "resourceURI": f"{BASE}/characters/1009491",
    "comics": {
        "available": 2,
        "collectionURI": f"{BASE}/characters/1009491/comics",
        "items": [
            {"resourceURI": f"{BASE}/comics/1590", "name": "Spider-Man (1990) #1"},
            {"resourceURI": f"{BASE}/comics/320", "name": "Amazing Spider-Man (1963) #1"},
        ],
        "returned": 2,
    },
    "series": {
        "available": 1,
        "collectionURI": f"{BASE}/characters/1009491/series",
        "items": [{"resourceURI": f"{BASE}/series/1987", "name": "Amazing Spider-Man (1963 - 1998)"}],
        "returned": 1,
    },
    "stories": {
        "available": 1,
        "collectionURI": f"{BASE}/characters/1009491/stories",
        "items": [{"resourceURI": f"{BASE}/stories/483", "name": "Cover #483", "type": "cover"}],
        "returned": 1,
    },
    "events": {
        "available": 0,
        "collectionURI": f"{BASE}/characters/1009491/events",
        "items": [],
        "returned": 0,
    },
    "urls": [{"type": "detail", "url": "http://marvel.com/characters/1009491/peter_parker"}],
}

AMAZING_SPIDER_MAN_1: dict[str, Any] = {
    "id": 320,
    "digitalId": 0,
    "title": "Amazing Spider-Man (1963) #1",
    "issueNumber": 1,
    "variantDescription": "",
    "description": None,
    "modified": "2019-10-02T11:01:59-0400",
    "isbn": "",
    "upc": "",
    "diamondCode": "",
    "ean": "",
    "issn": "",
    "format": "Comic",
    "pageCount": 36,
    "textObjects": [],
    "resourceURI": f"{BASE}/comics/320",
    "urls": [{"type": "detail", "url": "http://marvel.com/comics/issue/320"}],
    "series": {"resourceURI": f"{BASE}/series/1987", "name": "Amazing Spider-Man (1963 - 1998)"},
    "variants": [{"resourceURI": f"{BASE}/comics/94879", "name": "Amazing Spider-Man (1963) #1 (Variant)"}],
    "collections": [],
    "collectedIssues": [],
    "dates": [{"type": "onsaleDate", "date": "1963-03-10T00:00:00-0500"}],
    "prices": [{"type": "printPrice", "price": 0.12}],
    "thumbnail": {"path": "http://i.annihil.us/u/prod/marvel/i/mg/c/e0/5d94b1fa9ab3f", "extension": "jpg"},
    "images": [],
    "creators": {
        "available": 1,
        "collectionURI": f"{BASE}/comics/320/creators",
        "items": [{"resourceURI": f"{BASE}/creators/32", "name": "Steve Ditko", "role": "penciller"}],
        "returned": 1,
    },
    "characters": {
        "available": 1,
        "collectionURI": f"{BASE}/comics/320/characters",
        "items": [{"resourceURI": f"{BASE}/characters/1009610", "name": "Spider-Man (Peter Parker)"}],
        "returned": 1,
    },
    "stories": {
        "available": 1,
        "collectionURI": f"{BASE}/comics/320/stories",
        "items": [{"resourceURI": f"{BASE}/stories/1020", "name": "Cover #1020", "type": "cover"}],
        "returned": 1,
    },
    "events": {
        "available": 0,
        "collectionURI": f"{BASE}/comics/320/events",
        "items": [],
        "returned": 0,
    },
}


def envelope(
    results: list[dict[str, Any]],
    *,
    offset: int = 0,
    limit: int = 100,
    total: int | None = None,
) -> dict[str, Any]:
    """Response envelope around ``results``."""
    return {
        "code": 200,
        "status": "Ok",
        "copyright": "© 2024 MARVEL",
        "attributionText": "Data provided by Marvel. © 2024 MARVEL",
        "attributionHTML": '<a href="http://marvel.com">Data provided by Marvel. © 2024 MARVEL</a>',
        "etag": "f0fbae65eb2f8f28bdeea0a29be8749a4e67acb3",
        "data": {
            "offset": offset,
            "limit": limit,
            "total": len(results) if total is None else total,
            "count": len(results),
            "results": results,
        },
    }


@pytest.fixture
def character() -> dict[str, Any]:
    return copy.deepcopy(PETER_PARKER)


@pytest.fixture
def comic() -> dict[str, Any]:
    return copy.deepcopy(AMAZING_SPIDER_MAN_1)


@pytest.fixture
def http_client() -> AsyncMock:
    """In-memory transport answering every request with one Peter Parker page."""
    return AsyncMock(return_value=envelope([copy.deepcopy(PETER_PARKER)]))


@pytest.fixture
def make_envelope():
    return envelope


@pytest.fixture
def make_api(http_client):
    """Build a query factory backed by the in-memory transport."""

    def build(**kwargs: Any) -> QueryFactory:
        kwargs.setdefault("auto_query", True)
        kwargs.setdefault("http_client", http_client)
        return init(PUBLIC_KEY, PRIVATE_KEY, **kwargs)

    return build
