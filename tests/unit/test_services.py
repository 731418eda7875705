from __future__ import annotations

import pytest
from conftest import FakeClient, page, rich, text_prop, title_prop

from profile_content.config.loader import AppConfig, ConfigError, NotionConfig, ServerConfig
from profile_content.notion.client import UpstreamError
from profile_content.services.photos import find_photos_value, photos_response, split_photos
from profile_content.services.profile import (
    MISCONFIGURED_MESSAGE,
    NO_STORE,
    UPSTREAM_MESSAGE,
    build_client,
    load_profile,
    profile_response,
)


def _config(token: str | None = "t", database_id: str | None = "db") -> AppConfig:
    return AppConfig(notion=NotionConfig(token=token, database_id=database_id), server=ServerConfig())


def test_load_profile_single_fetch(sample_pages):
    client = FakeClient(sample_pages)
    result = load_profile(_config(), client)
    assert client.calls == 1
    assert result.content.config["name"] == "Ada"
    assert result.report.total_rows == 4


def test_load_profile_missing_credentials_is_config_error():
    with pytest.raises(ConfigError):
        load_profile(_config(token=None))


def test_build_client_uses_explicit_config():
    client = build_client(_config())
    assert client.token == "t"
    assert client.database_id == "db"


def test_profile_response_success(sample_pages):
    resp = profile_response(_config(), FakeClient(sample_pages))
    assert resp.status == 200
    assert resp.headers["Cache-Control"] == NO_STORE
    assert resp.body["name"] == "Ada"
    assert resp.body["headline"] == "Hello <strong>world</strong>"
    assert resp.body["projects"][0]["icon"] == {"type": "emoji", "value": "🚀"}
    assert "error" not in resp.body


def test_profile_response_empty_database_is_not_an_error():
    resp = profile_response(_config(), FakeClient([]))
    assert resp.status == 200
    assert resp.body == {"projects": [], "talks": []}


def test_profile_response_missing_credentials():
    resp = profile_response(_config(database_id=None))
    assert resp.status == 500
    assert resp.body == {"error": MISCONFIGURED_MESSAGE}
    assert resp.headers["Cache-Control"] == NO_STORE


def test_profile_response_upstream_failure():
    resp = profile_response(_config(), FakeClient(error=UpstreamError("HTTP 502: bad gateway", status=502)))
    assert resp.status == 500
    assert resp.body == {"error": UPSTREAM_MESSAGE, "details": "HTTP 502: bad gateway"}


@pytest.mark.parametrize(
    "value,expected",
    [
        ("https://a/1.jpg; https://a/2.jpg ;", ["https://a/1.jpg", "https://a/2.jpg"]),
        ("", []),
        (None, []),
        ("/local.png", ["/local.png"]),
    ],
)
def test_split_photos(value, expected):
    assert split_photos(value) == expected


def test_find_photos_value_case_insensitive():
    assert find_photos_value({"PhotosFile": "a", "name": "x"}) == "a"
    assert find_photos_value({"name": "x"}) is None


def test_photos_response_from_config_row():
    pages = [page({"Name": title_prop("photosFile"), "Value": text_prop(rich("https://a/1.jpg;", bold=True), rich("https://a/2.jpg"))})]
    resp = photos_response(_config(), FakeClient(pages))
    assert resp.body == ["https://a/1.jpg", "https://a/2.jpg"]


def test_photos_response_failure_gives_empty_list():
    resp = photos_response(_config(), FakeClient(error=UpstreamError("down")))
    assert resp.status == 200
    assert resp.body == []


def test_profile_response_survives_malformed_title_fragment():
    pages = [
        page({"Name": title_prop("name"), "Value": text_prop(rich("Ada"))}),
        page({"Name": {"type": "title", "title": [{"text": {"content": 7}}]}, "Value": text_prop(rich("v"))}),
    ]
    resp = profile_response(_config(), FakeClient(pages))
    assert resp.status == 200
    assert resp.body == {"name": "Ada", "projects": [], "talks": []}
