from __future__ import annotations

import json
import threading
import urllib.error
import urllib.request

import pytest
from conftest import FakeClient, page, rich, text_prop, title_prop

from profile_content.config.loader import AppConfig, NotionConfig, ServerConfig
from profile_content.notion.client import UpstreamError
from profile_content.server.handler import make_server

"""HTTP endpoints served on an ephemeral port with a fake row source."""


@pytest.fixture()
def serve():
    servers = []

    def _start(client: FakeClient, token: str | None = "t"):
        cfg = AppConfig(notion=NotionConfig(token=token, database_id="db"), server=ServerConfig())
        server = make_server(cfg, "127.0.0.1", 0, client_factory=lambda: client)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        host, port = server.server_address[:2]
        return f"http://{host}:{port}"

    yield _start
    for s in servers:
        s.shutdown()
        s.server_close()


def _get(url: str):
    try:
        with urllib.request.urlopen(url, timeout=5) as resp:
            return resp.status, dict(resp.headers), json.loads(resp.read())
    except urllib.error.HTTPError as e:
        return e.code, dict(e.headers), json.loads(e.read())


def test_profile_endpoint(serve, sample_pages):
    base = serve(FakeClient(sample_pages))
    status, headers, body = _get(f"{base}/api/profile")
    assert status == 200
    assert headers["Cache-Control"] == "no-store, max-age=0"
    assert body["name"] == "Ada"
    assert len(body["projects"]) == 1 and len(body["talks"]) == 1


def test_each_request_fetches_once(serve, sample_pages):
    client = FakeClient(sample_pages)
    base = serve(client)
    _get(f"{base}/api/profile")
    _get(f"{base}/api/profile/")
    assert client.calls == 2


def test_profile_endpoint_upstream_error(serve):
    base = serve(FakeClient(error=UpstreamError("timeout")))
    status, _, body = _get(f"{base}/api/profile")
    assert status == 500
    assert body["error"] == "Failed to fetch data from Notion"
    assert body["details"] == "timeout"


def test_photos_endpoint(serve):
    pages = [page({"Name": title_prop("photosFile"), "Value": text_prop(rich("/a.jpg;/b.jpg"))})]
    base = serve(FakeClient(pages))
    status, _, body = _get(f"{base}/api/photos")
    assert status == 200
    assert body == ["/a.jpg", "/b.jpg"]


def test_unknown_path_404(serve):
    base = serve(FakeClient())
    status, _, body = _get(f"{base}/nope")
    assert status == 404
    assert body == {"error": "not found"}
