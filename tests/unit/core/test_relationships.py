"""Unit tests for the type-relationship table and reference classification."""

import pytest

from marvelquery.core import RELATIONSHIPS, ReferenceKind, ResourceType, reference_kind, referenced_type

BASE = "http://gateway.marvel.com/v1/public"


class TestRelationships:
    """Test RELATIONSHIPS and referenced_type()."""

    def test_every_type_has_an_entry(self):
        assert set(RELATIONSHIPS) == set(ResourceType)

    @pytest.mark.parametrize(
        "resource_type,field,expected",
        [
            (ResourceType.COMICS, "series", ResourceType.SERIES),
            (ResourceType.COMICS, "variants", ResourceType.COMICS),
            (ResourceType.COMICS, "collectedIssues", ResourceType.COMICS),
            (ResourceType.CHARACTERS, "comics", ResourceType.COMICS),
            (ResourceType.EVENTS, "next", ResourceType.EVENTS),
            (ResourceType.SERIES, "previous", ResourceType.SERIES),
            (ResourceType.STORIES, "originalIssue", ResourceType.COMICS),
        ],
    )
    def test_referenced_type(self, resource_type, field, expected):
        assert referenced_type(resource_type, field) is expected

    def test_unrelated_field(self):
        assert referenced_type(ResourceType.CHARACTERS, "thumbnail") is None
        assert referenced_type(ResourceType.CHARACTERS, "name") is None

    def test_no_type_references_itself_through_a_collection_field(self):
        for resource_type, fields in RELATIONSHIPS.items():
            assert fields.get(str(resource_type)) is None

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            RELATIONSHIPS[ResourceType.COMICS]["series"] = ResourceType.EVENTS  # type: ignore[index]


class TestReferenceKind:
    """Test reference_kind() classification."""

    def test_resource(self):
        value = {"resourceURI": f"{BASE}/series/1987", "name": "Amazing Spider-Man"}
        assert reference_kind(value) is ReferenceKind.RESOURCE

    def test_collection(self):
        value = {
            "available": 0,
            "returned": 0,
            "collectionURI": f"{BASE}/characters/1/comics",
            "items": [],
        }
        assert reference_kind(value) is ReferenceKind.COLLECTION

    def test_resource_array(self):
        value = [{"resourceURI": f"{BASE}/comics/1", "name": "Variant"}]
        assert reference_kind(value) is ReferenceKind.RESOURCE_ARRAY

    @pytest.mark.parametrize(
        "value",
        [None, "", 42, [], [1, 2], {"path": "x", "extension": "jpg"}, {"resourceURI": ""}],
    )
    def test_none(self, value):
        assert reference_kind(value) is ReferenceKind.NONE
