# Watchboard test scripts
from __future__ import annotations

import requests
import responses

from services.search import SearchAdapter, normalize_itunes, normalize_tvmaze, should_search

ITUNES = "https://itunes.apple.com/search"
TVMAZE = "https://api.tvmaze.com/search/shows"

ITUNES_BODY = {
    "resultCount": 2,
    "results": [
        {
            "trackName": "Inception",
            "artworkUrl100": "https://is1.mzstatic.com/image/thumb/abc/100x100bb.jpg",
            "releaseDate": "2010-07-16T07:00:00Z",
        },
        {"trackName": "Inception: The Cobol Job"},
    ],
}

TVMAZE_BODY = [
    {"score": 0.9, "show": {"name": "Incorporated", "premiered": "2016-11-30",
                            "image": {"medium": "https://tvm/m.jpg", "original": "https://tvm/o.jpg"}}},
    {"score": 0.5, "show": {"name": "Inside", "premiered": None, "image": None}},
]


def test_should_search_threshold() -> None:
    assert should_search("inc") is True
    assert should_search("in") is False
    assert should_search("") is False
    assert should_search("inception", manual_mode=True) is False
    assert should_search("in", min_length=2) is True


def test_normalize_itunes() -> None:
    out = normalize_itunes(ITUNES_BODY)
    assert out[0] == {
        "title": "Inception",
        "poster": "https://is1.mzstatic.com/image/thumb/abc/500x500bb.jpg",
        "type": "movie",
        "year": "2010",
    }
    assert out[1] == {"title": "Inception: The Cobol Job", "poster": "", "type": "movie"}
    assert normalize_itunes({"results": "nope"}) == []
    assert normalize_itunes(None) == []


def test_normalize_tvmaze_prefers_original_image_and_limits() -> None:
    out = normalize_tvmaze(TVMAZE_BODY)
    assert out[0] == {"title": "Incorporated", "poster": "https://tvm/o.jpg", "type": "tv", "year": "2016"}
    assert out[1] == {"title": "Inside", "poster": "", "type": "tv"}
    assert len(normalize_tvmaze(TVMAZE_BODY, limit=1)) == 1
    assert normalize_tvmaze({"show": {}}) == []


def test_search_merges_movies_before_shows() -> None:
    adapter = SearchAdapter()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, ITUNES, json=ITUNES_BODY, status=200)
        rsps.add(responses.GET, TVMAZE, json=TVMAZE_BODY, status=200)

        results = adapter.search("Incep")

        assert [r["type"] for r in results] == ["movie", "movie", "tv", "tv"]
        urls = {c.request.url.split("?")[0]: c.request.url for c in rsps.calls}
        assert "term=Incep" in urls[ITUNES]
        assert "entity=movie" in urls[ITUNES]
        assert "limit=5" in urls[ITUNES]
        assert "q=Incep" in urls[TVMAZE]


def test_failed_source_contributes_nothing() -> None:
    adapter = SearchAdapter()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, ITUNES, status=503)
        rsps.add(responses.GET, TVMAZE, json=TVMAZE_BODY, status=200)
        assert [r["title"] for r in adapter.search("Inc")] == ["Incorporated", "Inside"]

    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, ITUNES, json=ITUNES_BODY, status=200)
        rsps.add(responses.GET, TVMAZE, body=requests.ConnectionError("offline"))
        assert [r["type"] for r in adapter.search("Inc")] == ["movie", "movie"]


def test_both_sources_failing_yields_empty_list() -> None:
    adapter = SearchAdapter()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, ITUNES, body="<html>", status=200)
        rsps.add(responses.GET, TVMAZE, status=500)
        assert adapter.search("Inception") == []


def test_limits_come_from_config() -> None:
    adapter = SearchAdapter(lambda: {"search": {"movie_limit": 1, "tv_limit": 1}})
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, ITUNES, json=ITUNES_BODY, status=200)
        rsps.add(responses.GET, TVMAZE, json=TVMAZE_BODY, status=200)
        results = adapter.search("Inc")

        assert [r["title"] for r in results] == ["Inception", "Incorporated"]
        itunes_call = next(c for c in rsps.calls if c.request.url.startswith(ITUNES))
        assert "limit=1" in itunes_call.request.url
    assert adapter.min_query_length() == 3
