# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Any
import pytest

from profile_content.logging.init import reset_logging


def rich(text: str, **annotations: Any) -> dict[str, Any]:
    """Raw Notion rich_text fragment."""
    href = annotations.pop("href", None)
    return {
        "type": "text",
        "plain_text": text,
        "href": href,
        "annotations": {
            "bold": False, "italic": False, "strikethrough": False,
            "underline": False, "code": False, "color": "default",
            **annotations,
        },
    }


def page(props: dict[str, Any], page_id: str = "p", icon: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"object": "page", "id": page_id, "icon": icon, "properties": props}


def title_prop(text: str) -> dict[str, Any]:
    return {"type": "title", "title": [rich(text)] if text else []}


def text_prop(*fragments: dict[str, Any]) -> dict[str, Any]:
    return {"type": "rich_text", "rich_text": list(fragments)}


def multi_prop(*labels: str) -> dict[str, Any]:
    return {"type": "multi_select", "multi_select": [{"name": n} for n in labels]}


class FakeClient:
    """Stands in for NotionClient; returns canned pages or raises."""

    def __init__(self, pages: list[dict[str, Any]] | None = None, error: Exception | None = None) -> None:
        self.pages = pages or []
        self.error = error
        self.calls = 0

    def query_database(self) -> list[dict[str, Any]]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.pages


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def clean_env(monkeypatch):
    # setenv first so values written later by load_dotenv are undone too
    for name in ("NOTION_TOKEN", "NOTION_DATABASE_ID", "NOTION_VERSION", "NOTION_TIMEOUT"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """notion:
  token: secret_yaml
  database_id: db_yaml
  timeout: 5
server:
  host: 0.0.0.0
  port: 8080
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "profile.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_pages() -> list[dict[str, Any]]:
    return [
        page({"Name": title_prop("name"), "Value": text_prop(rich("Ada"))}, "cfg-1"),
        page({"Name": title_prop("headline"), "Value": text_prop(rich("Hello "), rich("world", bold=True))}, "cfg-2"),
        page(
            {
                "Name": title_prop("X"),
                "Tags": multi_prop("Projects"),
                "Value": text_prop(rich("desc")),
                "Link": {"type": "url", "url": "http://e.co"},
            },
            "proj-1",
            icon={"type": "emoji", "emoji": "🚀"},
        ),
        page(
            {
                "Name": title_prop("Keynote"),
                "Tags": multi_prop("talks"),
                "Date": {"type": "date", "date": {"start": "2024-01-01", "end": None}},
            },
            "talk-1",
        ),
    ]
