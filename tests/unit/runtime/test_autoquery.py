"""Unit tests for the AutoQuery extension engine."""

from __future__ import annotations

import copy
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from marvelquery.core import AutoQueryExtensionWarning, InvalidEndpoint, validate_endpoint
from marvelquery.runtime import AutoQuery, ExtendedCollection, ExtendedResource, is_extended, sort_endpoints

BASE = "http://gateway.marvel.com/v1/public"


@pytest.fixture
def factory() -> MagicMock:
    query = MagicMock()
    query.fetch = AsyncMock(return_value=query)
    query.fetch_single = AsyncMock(return_value={"id": 1})
    return MagicMock(return_value=query)


def engine_for(factory, endpoint) -> AutoQuery:
    return AutoQuery(factory, validate_endpoint(endpoint))


class TestExtendResult:
    """Test extension of top-level results."""

    def test_result_endpoint_from_resource_uri(self, factory, character):
        extended = engine_for(factory, "characters").extend(character)
        assert isinstance(extended, ExtendedResource)
        assert extended.endpoint == ("characters", 1009491)
        assert extended["endpoint"] == ("characters", 1009491)

    def test_result_endpoint_from_sub_collection_query(self, factory, comic):
        extended = engine_for(factory, ("characters", 1009491, "comics")).extend(comic)
        assert extended.endpoint == ("comics", 320)

    def test_result_endpoint_falls_back_to_id(self, factory, character):
        del character["resourceURI"]
        extended = engine_for(factory, "characters").extend(character)
        assert extended.endpoint == ("characters", 1009491)

    def test_collection_field(self, factory, character):
        extended = engine_for(factory, "characters").extend(character)
        comics = extended["comics"]
        assert isinstance(comics, ExtendedCollection)
        assert comics.endpoint == ("characters", 1009491, "comics")
        assert comics["available"] == 2

    def test_collection_items_use_collection_type(self, factory, character):
        extended = engine_for(factory, "characters").extend(character)
        items = extended["comics"]["items"]
        assert [item.endpoint for item in items] == [("comics", 1590), ("comics", 320)]
        assert items[0]["name"] == "Spider-Man (1990) #1"

    def test_resource_field(self, factory, comic):
        extended = engine_for(factory, "comics").extend(comic)
        assert isinstance(extended["series"], ExtendedResource)
        assert extended["series"].endpoint == ("series", 1987)

    def test_resource_array_field(self, factory, comic):
        extended = engine_for(factory, "comics").extend(comic)
        variants = extended["variants"]
        assert isinstance(variants, list)
        assert variants[0].endpoint == ("comics", 94879)
        assert not hasattr(variants, "query")

    def test_empty_arrays_and_scalars_pass_through(self, factory, comic):
        extended = engine_for(factory, "comics").extend(comic)
        assert extended["collections"] == []
        assert extended["title"] == comic["title"]
        assert extended["thumbnail"] == comic["thumbnail"]

    def test_raw_result_not_mutated(self, factory, character):
        snapshot = copy.deepcopy(character)
        extended = engine_for(factory, "characters").extend(character)
        assert character == snapshot
        assert "endpoint" not in character["comics"]
        assert extended["thumbnail"] is not character["thumbnail"]

    def test_idempotent(self, factory, character):
        engine = engine_for(factory, "characters")
        once = engine.extend(character)
        twice = engine.extend(once)
        assert twice is once
        assert twice == engine_for(factory, "characters").extend(character)

    def test_extended_fields_pass_through(self, factory, character):
        engine = engine_for(factory, "characters")
        comics = engine.extend(character)["comics"]
        mixed = dict(character, comics=comics)
        assert engine.extend(mixed)["comics"] is comics

    def test_deepcopy_keeps_extension(self, factory, character):
        extended = engine_for(factory, "characters").extend(character)
        clone = copy.deepcopy(extended)
        assert isinstance(clone, ExtendedResource)
        assert clone == extended
        assert isinstance(clone["comics"], ExtendedCollection)


class TestInvalidURIs:
    """Test best-effort handling of unparseable references."""

    def test_bad_resource_uri_left_unextended(self, factory, comic):
        comic["series"] = {"resourceURI": f"{BASE}/series/abc", "name": "Broken"}
        engine = engine_for(factory, "comics")

        with pytest.warns(AutoQueryExtensionWarning):
            extended = engine.extend(comic)

        assert not is_extended(extended["series"])
        assert extended["series"]["name"] == "Broken"
        assert engine.valid is False

    def test_bad_collection_uri_left_unextended(self, factory, character):
        character["comics"]["collectionURI"] = f"{BASE}/villains/1/comics"
        engine = engine_for(factory, "characters")

        with pytest.warns(AutoQueryExtensionWarning):
            extended = engine.extend(character)

        assert not is_extended(extended["comics"])
        assert is_extended(extended["series"])
        assert engine.valid is False

    @pytest.mark.parametrize("uri", ["", None, 42])
    def test_unusable_collection_uri_marks_invalid(self, factory, character, uri):
        character["comics"]["collectionURI"] = uri
        engine = engine_for(factory, "characters")

        with pytest.warns(AutoQueryExtensionWarning):
            extended = engine.extend(character)

        assert not is_extended(extended["comics"])
        assert extended["comics"]["available"] == character["comics"]["available"]
        assert engine.valid is False

    def test_empty_resource_uri_marks_invalid(self, factory, comic):
        comic["series"] = {"resourceURI": "", "name": "Unknown"}
        engine = engine_for(factory, "comics")

        with pytest.warns(AutoQueryExtensionWarning):
            extended = engine.extend(comic)

        assert extended["series"] == {"resourceURI": "", "name": "Unknown"}
        assert engine.valid is False

    def test_summary_array_without_uris_marks_invalid(self, factory, comic):
        comic["variants"] = [{"resourceURI": None, "name": "Variant"}]
        engine = engine_for(factory, "comics")

        with pytest.warns(AutoQueryExtensionWarning):
            engine.extend(comic)

        assert engine.valid is False

    def test_valid_engine(self, factory, character):
        engine = engine_for(factory, "characters")
        engine.inject([character])
        assert engine.valid is True


class TestExtendedMethods:
    """Test methods attached to extended values."""

    @pytest.mark.asyncio
    async def test_resource_fetch(self, factory, comic):
        series = engine_for(factory, "comics").extend(comic)["series"]
        query = await series.fetch()
        factory.assert_called_once_with(("series", 1987))
        query.fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_resource_fetch_single(self, factory, comic):
        series = engine_for(factory, "comics").extend(comic)["series"]
        assert await series.fetch_single() == {"id": 1}
        factory.return_value.fetch_single.assert_awaited_once()

    def test_resource_query(self, factory, character):
        extended = engine_for(factory, "characters").extend(character)
        extended.query("comics", {"limit": 5})
        factory.assert_called_once_with(("characters", 1009491, "comics"), {"limit": 5})

    def test_resource_query_same_type_rejected(self, factory, character):
        extended = engine_for(factory, "characters").extend(character)
        with pytest.raises(InvalidEndpoint):
            extended.query("characters")
        factory.assert_not_called()

    def test_collection_query(self, factory, character):
        comics = engine_for(factory, "characters").extend(character)["comics"]
        comics.query({"format": "comic"})
        factory.assert_called_once_with(("characters", 1009491, "comics"), {"format": "comic"})


class TestInjectionSummary:
    """Test inject() and its summary."""

    def test_inject_extends_all(self, factory, character):
        results = engine_for(factory, "characters").inject([character, character])
        assert all(isinstance(result, ExtendedResource) for result in results)

    def test_summary_logged(self, factory, character, caplog):
        with caplog.at_level(logging.DEBUG, logger="marvelquery.runtime.autoquery"):
            engine_for(factory, "characters").inject([character])

        assert "AutoQuery Injection Summary" in caplog.text
        assert "Total Collections Processed: 4" in caplog.text
        assert "comics/1590 - Spider-Man (1990) #1" in caplog.text
        assert "characters/1009491/comics - Peter Parker" in caplog.text

    def test_sort_endpoints(self):
        endpoints = [
            ("series", 2),
            ("comics", 10),
            ("comics", 2),
            ("comics", 2, "characters"),
            ("comics", 2),
        ]
        assert sort_endpoints(endpoints) == [
            ("comics", 2),
            ("comics", 2, "characters"),
            ("comics", 10),
            ("series", 2),
        ]
