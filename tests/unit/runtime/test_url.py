"""Unit tests for signed URL construction."""

import hashlib
from urllib.parse import parse_qs, urlsplit

import pytest

from marvelquery.core import APIKeys, MissingCredentials, validate_endpoint
from marvelquery.runtime import build_url, request_hash

KEYS = APIKeys(public_key="public", private_key="secret")
BASE_URL = "https://gateway.marvel.com/v1/public"


def query_of(url: str) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(urlsplit(url).query).items()}


class TestRequestHash:
    """Test request_hash()."""

    def test_md5_of_ts_private_public(self):
        expected = hashlib.md5(b"1700000000000secretpublic").hexdigest()
        assert request_hash("1700000000000", KEYS) == expected


class TestBuildURL:
    """Test build_url()."""

    def test_path_from_endpoint(self):
        url = build_url(KEYS, validate_endpoint(("characters", 1009491, "comics")), {}, base_url=BASE_URL)
        assert urlsplit(url).path == "/v1/public/characters/1009491/comics"

    def test_auth_parameters(self):
        url = build_url(KEYS, validate_endpoint("characters"), {}, base_url=BASE_URL, timestamp="123")
        query = query_of(url)
        assert query["apikey"] == "public"
        assert query["ts"] == "123"
        assert query["hash"] == hashlib.md5(b"123secretpublic").hexdigest()

    def test_default_timestamp_is_epoch_millis(self):
        url = build_url(KEYS, validate_endpoint("characters"), {}, base_url=BASE_URL)
        ts = query_of(url)["ts"]
        assert ts.isdigit()
        assert len(ts) >= 13

    def test_params_encoded(self):
        params = {"nameStartsWith": "Spider Man", "limit": 10, "offset": 0}
        url = build_url(KEYS, validate_endpoint("characters"), params, base_url=BASE_URL)
        query = query_of(url)
        assert query["nameStartsWith"] == "Spider Man"
        assert query["limit"] == "10"
        assert query["offset"] == "0"

    def test_booleans_and_lists(self):
        params = {"noVariants": True, "hasDigitalIssue": False, "characters": [1, 2]}
        url = build_url(KEYS, validate_endpoint("comics"), params, base_url=BASE_URL)
        query = query_of(url)
        assert query["noVariants"] == "true"
        assert query["hasDigitalIssue"] == "false"
        assert query["characters"] == "1,2"

    def test_none_values_skipped(self):
        url = build_url(KEYS, validate_endpoint("comics"), {"title": None}, base_url=BASE_URL)
        assert "title" not in query_of(url)

    def test_trailing_slash_on_base_url(self):
        url = build_url(KEYS, validate_endpoint("comics"), {}, base_url=BASE_URL + "/")
        assert "/public/comics?" in url

    def test_missing_keys(self):
        with pytest.raises(MissingCredentials):
            build_url(None, validate_endpoint("comics"), {}, base_url=BASE_URL)
