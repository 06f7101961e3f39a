# Watchboard test scripts
from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from services.store import ItemStore
from wb_platform import config_base as cb
from wb_platform.config_base import PLACEHOLDER_POSTER
from watchboard import create_app


@pytest.fixture()
def app(config_base: Path, store: ItemStore, searcher):
    return create_app(store=store, searcher=searcher, load_cfg=cb.load_config)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


def test_index_and_favicon(client: TestClient) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert "text/html" in r.headers["content-type"]
    assert "Watchboard" in r.text

    r = client.get("/favicon.svg")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("image/svg+xml")


def test_list_and_get(client: TestClient) -> None:
    r = client.get("/api/items")
    assert r.status_code == 200
    assert r.headers["Cache-Control"] == "no-store"
    data = r.json()
    assert data["count"] == 12

    assert client.get("/api/items/4").json()["item"]["title"] == "Breaking Bad"
    assert client.get("/api/items/nope").status_code == 404


def test_add_item_defaults(client: TestClient, store: ItemStore) -> None:
    r = client.post("/api/items", json={"title": "  Heat  "})
    assert r.status_code == 200
    item = r.json()["item"]
    assert item["title"] == "Heat"
    assert item["poster"] == PLACEHOLDER_POSTER
    assert (item["type"], item["category"]) == ("movie", "planning")
    assert store.get(item["id"]) == item

    r = client.post("/api/items", json={"title": "Dark", "type": "tv", "category": "watching", "poster": "p.jpg"})
    assert r.json()["item"]["poster"] == "p.jpg"


def test_add_item_rejects_blank_and_bad_values(client: TestClient, store: ItemStore) -> None:
    assert client.post("/api/items", json={"title": "   "}).status_code == 400
    assert client.post("/api/items", json={"title": "X", "type": "book"}).status_code == 422
    assert len(store) == 12


def test_patch_item(client: TestClient, store: ItemStore) -> None:
    r = client.patch("/api/items/3", json={"score": 8, "notes": "Docking scene"})
    assert r.status_code == 200
    assert r.json()["item"]["score"] == 8
    assert store.get("3")["notes"] == "Docking scene"

    r = client.patch("/api/items/3", json={"score": None})
    assert "score" not in r.json()["item"]

    assert client.patch("/api/items/3", json={"score": 11}).status_code == 422
    assert client.patch("/api/items/3", json={"title": " "}).status_code == 400
    assert client.patch("/api/items/nope", json={"notes": "x"}).status_code == 404


def test_delete_item(client: TestClient, store: ItemStore) -> None:
    r = client.delete("/api/items/12")
    assert r.status_code == 200
    assert r.json()["deleted"] == "12"
    assert store.get("12") is None
    assert client.delete("/api/items/12").status_code == 404


def test_move_item(client: TestClient, store: ItemStore) -> None:
    r = client.post("/api/items/8/move", json={"category": "watched"})
    assert r.status_code == 200
    body = r.json()
    assert body["moved"] is True
    assert body["item"]["category"] == "watched"
    assert store.get("8")["category"] == "watched"

    assert client.post("/api/items/8/move", json={"category": "watched"}).json()["moved"] is False
    assert client.post("/api/items/8/move", json={"category": None}).json()["moved"] is False
    assert client.post("/api/items/8/move", json={"category": "later"}).json()["moved"] is False
    assert client.post("/api/items/nope/move", json={"category": "watched"}).status_code == 404


def test_board_filters(client: TestClient) -> None:
    r = client.get("/api/board", params={"planning": "tv", "dropped": "movie"})
    assert r.status_code == 200
    cols = {c["id"]: c for c in r.json()["columns"]}
    assert [it["id"] for it in cols["planning"]["items"]] == ["9"]
    assert [it["id"] for it in cols["dropped"]["items"]] == ["10"]
    assert cols["watching"]["count"] == 3

    assert client.get("/api/board", params={"watching": "books"}).status_code == 400


def test_search_short_query_skips_network(client: TestClient, searcher) -> None:
    r = client.get("/api/search", params={"q": "in", "sid": "s1"})
    assert r.json() == {"ok": True, "query": "in", "stale": False, "results": []}
    assert searcher.queries == []


def test_search_returns_results(client: TestClient, searcher) -> None:
    r = client.get("/api/search", params={"q": "incep", "sid": "s1"})
    body = r.json()
    assert body["stale"] is False
    assert body["results"][0]["title"] == "Inception"
    assert searcher.queries == ["incep"]


def test_search_superseded_request_is_stale(app, client: TestClient, searcher) -> None:
    # a newer query from the same session lands while this one is in flight
    searcher.before_return = lambda q: app.state.search_gates.gate("s1").begin()

    body = client.get("/api/search", params={"q": "incep", "sid": "s1"}).json()
    assert body["stale"] is True
    assert body["results"] == []


def test_export(client: TestClient, store: ItemStore) -> None:
    r = client.get("/api/export")
    assert r.status_code == 200
    disp = r.headers["content-disposition"]
    assert disp.startswith('attachment; filename="watchlist-')
    assert disp.endswith('.json"')
    assert json.loads(r.content) == store.items()


def test_import_replaces_collection(client: TestClient, store: ItemStore) -> None:
    payload = [{"id": "a", "title": "Alien", "type": "movie", "category": "watched"}]
    r = client.post(
        "/api/import",
        files={"file": ("watchlist.json", json.dumps(payload).encode("utf-8"), "application/json")},
    )
    assert r.status_code == 200
    assert r.json()["count"] == 1
    assert store.items() == payload


def test_import_rejects_non_array(client: TestClient, store: ItemStore) -> None:
    r = client.post("/api/import", files={"file": ("bad.json", b'{"id": "a"}', "application/json")})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid file format"
    assert len(store) == 12


def test_config_roundtrip(client: TestClient, config_base: Path) -> None:
    cfg = client.get("/api/config").json()
    assert cfg["search"]["debounce_ms"] == 300
    assert cfg["ui"]["port"] == 8790

    r = client.post("/api/config", json={"search": {"debounce_ms": 150}, "junk": 1})
    assert r.status_code == 200
    assert r.json()["config"]["search"]["debounce_ms"] == 150

    saved = json.loads((config_base / "config.json").read_text(encoding="utf-8"))
    assert saved["search"]["debounce_ms"] == 150
    assert "junk" not in saved
    assert client.get("/api/config").json()["search"]["min_query_length"] == 3


def test_export_then_import_round_trip(client: TestClient, store: ItemStore) -> None:
    client.patch("/api/items/2", json={"notes": "Red pill"})
    before = store.items()
    exported = client.get("/api/export").content

    store.replace_all([{"id": "tmp", "title": "Tmp", "type": "movie", "category": "planning"}])
    r = client.post("/api/import", files={"file": ("watchlist.json", exported, "application/json")})
    assert r.status_code == 200
    assert store.items() == before


def test_imported_numeric_id_stays_editable(client: TestClient, store: ItemStore) -> None:
    payload = [{"id": 5, "title": "X", "type": "movie", "category": "planning", "poster": ""}]
    r = client.post("/api/import", files={"file": ("watchlist.json", json.dumps(payload).encode("utf-8"), "application/json")})
    assert r.status_code == 200

    r = client.patch("/api/items/5", json={"notes": "numeric"})
    assert r.status_code == 200
    assert r.json()["item"]["notes"] == "numeric"

    r = client.post("/api/items/5/move", json={"category": "watched"})
    assert r.status_code == 200
    assert r.json()["moved"] is True
    assert store.items()[0]["category"] == "watched"

    assert client.delete("/api/items/5").status_code == 200
    assert len(store) == 0
