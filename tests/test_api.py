"""Tests for the HTTP API."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from mediashelf.api.app import create_app
from mediashelf.config import Settings
from mediashelf.core.aggregator import Aggregator
from mediashelf.core.observability import MemoryFailureSink
from mediashelf.models.media import Movie
from mediashelf.store.entries import EntryStore

from conftest import FakeSource, make_albums


@pytest.fixture
def sink() -> MemoryFailureSink:
    return MemoryFailureSink()


@pytest.fixture
def client(tmp_path: Path, sink: MemoryFailureSink) -> TestClient:
    sources = [
        FakeSource("rt", items=[Movie(id="m1", title="M" * 70, year=1995)]),
        FakeSource("gr", error=RuntimeError("goodreads down")),
        FakeSource("sp", items=make_albums(2)),
    ]
    app = create_app(
        Settings(entries_path=tmp_path / "entries.json"),
        aggregator=Aggregator(sources, sink=sink),
        store=EntryStore(tmp_path / "entries.json"),
    )
    return TestClient(app)


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_search_returns_bundle(client: TestClient, sink: MemoryFailureSink) -> None:
    """It should return every slot, with the failed one empty."""

    resp = client.get("/search/the%20matrix")
    assert resp.status_code == 200
    data = resp.json()

    assert data["query"] == "the matrix"
    assert [s["source"] for s in data["slots"]] == ["rt", "gr", "sp"]
    rt, gr, sp = data["slots"]
    assert rt["items"][0]["title"] == "M" * 60 + "..."
    assert rt["items"][0]["year"] == 1995
    assert gr["ok"] is False
    assert gr["items"] == []
    assert [a["name"] for a in sp["items"]] == ["Album 0", "Album 1"]
    assert sink.sources() == ["gr"]


def test_search_rejects_blank_query(client: TestClient) -> None:
    assert client.get("/search/%20").status_code == 422


def test_entries_crud(client: TestClient) -> None:
    resp = client.post(
        "/entries",
        json={"title": "Heat", "link": "https://rt.example/heat", "media_type": "movie"},
    )
    assert resp.status_code == 201
    entry_id = resp.json()["id"]

    listed = client.get("/entries").json()
    assert [e["id"] for e in listed["movie"]] == [entry_id]

    assert client.get(f"/entries/{entry_id}").json()["title"] == "Heat"

    assert client.delete(f"/entries/{entry_id}").status_code == 204
    assert client.get("/entries").json() == {}
    assert client.delete(f"/entries/{entry_id}").status_code == 404
    assert client.get(f"/entries/{entry_id}").status_code == 404


def test_save_rejects_invalid_image_url(client: TestClient) -> None:
    resp = client.post(
        "/entries",
        json={"title": "Heat", "link": "l", "media_type": "movie", "image_url": "::nope"},
    )
    assert resp.status_code == 422
