"""
Pytest tests for the web UI / JSON API (server.py), via FastAPI's TestClient.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Set up path for imports
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

from cypress_log_format import server
from cypress_log_format.exceptions import (
    FetchNetworkError,
    FetchTimeoutError,
    UpstreamStatusError,
)


@pytest.fixture
def client():
    return TestClient(server.create_app())


def test_index_page(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "text/html" in r.headers["content-type"]
    assert 'id="formatBtn"' in r.text


def test_format(client):
    r = client.post("/api/format", json={"text": "✗ test failed (120ms)"})
    assert r.status_code == 200
    html = r.json()["html"]
    assert html.startswith('<span class="ansi-red bold">✗</span>')
    assert '<span class="ansi-gray">(120ms)</span>' in html


def test_format_colored_input_uses_converter(client):
    r = client.post("/api/format", json={"text": "\x1b[1m\x1b[32mOK\x1b[0m"})
    assert r.json() == {"html": '<span class="ansi-green bold">OK</span>'}


def test_format_rejects_oversized_text(client, monkeypatch):
    monkeypatch.setenv("CYPRESS_LOG_FORMAT_MAX_BODY_BYTES", "10")
    r = client.post("/api/format", json={"text": "x" * 11})
    assert r.status_code == 413
    assert "error" in r.json()


def test_fetch_missing_url(client):
    for body in ({}, {"url": ""}, {"url": 42}):
        r = client.post("/api/fetch", json=body)
        assert r.status_code == 400
        assert r.json() == {"error": "Missing url"}


def test_fetch_success(client, monkeypatch):
    monkeypatch.setattr(server, "fetch_remote_text", lambda url: f"log from {url}")
    r = client.post("/api/fetch", json={"url": "https://example.com/log.txt"})
    assert r.status_code == 200
    assert r.json() == {"text": "log from https://example.com/log.txt"}


@pytest.mark.parametrize(
    "exc, status",
    [
        (UpstreamStatusError(status_code=404, url="u", message="Fetch failed: 404"), 404),
        (FetchTimeoutError(status_code=504, url="u", message="Fetch timed out after 10s: u"), 504),
        (FetchNetworkError(status_code=502, url="u", message="Fetch failed for u: refused"), 502),
    ],
)
def test_fetch_errors_map_to_status(client, monkeypatch, exc, status):
    def boom(url):
        raise exc

    monkeypatch.setattr(server, "fetch_remote_text", boom)
    r = client.post("/api/fetch", json={"url": "https://example.com"})
    assert r.status_code == status
    assert r.json() == {"error": str(exc)}


def test_permalink_round_trip(client):
    r = client.post("/api/permalink", json={"text": "15 passing"})
    assert r.status_code == 200
    fragment = r.json()["fragment"]
    assert fragment.startswith("#log=")

    r = client.post("/api/permalink/decode", json={"fragment": fragment})
    assert r.json() == {"text": "15 passing", "html": '<span class="bold">15 passing</span>'}


def test_permalink_requires_content(client):
    r = client.post("/api/permalink", json={"text": "  "})
    assert r.status_code == 400
    assert r.json() == {"error": "No content"}


def test_permalink_decode_failure_is_empty_not_error(client):
    r = client.post("/api/permalink/decode", json={"fragment": "#log=garbage"})
    assert r.status_code == 200
    assert r.json() == {"text": "", "html": ""}
