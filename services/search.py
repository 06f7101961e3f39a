# services/search.py
# Watchboard - Title search across iTunes (movies) and TVMaze (shows)
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

import requests

from _logging import log as _log
from wb_platform.config_base import DEFAULT_CFG

log = _log.child("SEARCH")

SearchResult = dict[str, Any]


def should_search(query: str, manual_mode: bool = False, min_length: int = 3) -> bool:
    return not manual_mode and len(query or "") >= min_length


def _year(date_str: Any) -> str | None:
    if not isinstance(date_str, str) or not date_str:
        return None
    head = date_str.split("-", 1)[0].strip()
    return head or None


def _result(title: Any, poster: str, typ: str, year: str | None) -> SearchResult:
    out: SearchResult = {"title": str(title or ""), "poster": poster, "type": typ}
    if year:
        out["year"] = year
    return out


def normalize_itunes(payload: Any, limit: int = 5) -> list[SearchResult]:
    rows = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        return []
    out: list[SearchResult] = []
    for row in rows[:limit] if limit else rows:
        if not isinstance(row, dict):
            continue
        art = row.get("artworkUrl100")
        poster = art.replace("100x100", "500x500") if isinstance(art, str) else ""
        out.append(_result(row.get("trackName"), poster, "movie", _year(row.get("releaseDate"))))
    return out


def normalize_tvmaze(payload: Any, limit: int = 5) -> list[SearchResult]:
    if not isinstance(payload, list):
        return []
    out: list[SearchResult] = []
    for row in payload[:limit] if limit else payload:
        show = row.get("show") if isinstance(row, dict) else None
        if not isinstance(show, dict):
            continue
        img = show.get("image") if isinstance(show.get("image"), dict) else {}
        poster = img.get("original") or img.get("medium") or ""
        out.append(_result(show.get("name"), str(poster), "tv", _year(show.get("premiered"))))
    return out


class SearchAdapter:
    """Queries both sources concurrently; a failing source contributes nothing."""

    def __init__(
        self,
        load_cfg: Callable[[], dict[str, Any]] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.load_cfg = load_cfg or (lambda: DEFAULT_CFG)
        self.session = session or requests.Session()

    def _cfg(self) -> dict[str, Any]:
        sc = dict(DEFAULT_CFG["search"])
        sc.update((self.load_cfg() or {}).get("search") or {})
        return sc

    def min_query_length(self) -> int:
        return int(self._cfg().get("min_query_length", 3))

    def _get_json(self, url: str, params: dict[str, Any], sc: dict[str, Any]) -> Any:
        r = self.session.get(
            url,
            params=params,
            headers={"User-Agent": str(sc.get("user_agent") or "Watchboard/1.0"), "Accept": "application/json"},
            timeout=float(sc.get("timeout") or 10),
        )
        r.raise_for_status()
        return r.json()

    def search_movies(self, query: str) -> list[SearchResult]:
        sc = self._cfg()
        limit = int(sc.get("movie_limit") or 5)
        try:
            data = self._get_json(sc["itunes_url"], {"term": query, "entity": "movie", "limit": limit}, sc)
            return normalize_itunes(data, limit)
        except Exception as e:
            log.warn(f"iTunes search failed for {query!r}: {e}")
            return []

    def search_tv(self, query: str) -> list[SearchResult]:
        sc = self._cfg()
        limit = int(sc.get("tv_limit") or 5)
        try:
            data = self._get_json(sc["tvmaze_url"], {"q": query}, sc)
            return normalize_tvmaze(data, limit)
        except Exception as e:
            log.warn(f"TVMaze search failed for {query!r}: {e}")
            return []

    def search(self, query: str) -> list[SearchResult]:
        with ThreadPoolExecutor(max_workers=2) as ex:
            movies = ex.submit(self.search_movies, query)
            shows = ex.submit(self.search_tv, query)
            results = movies.result() + shows.result()
        log.debug(f"{query!r}: {len(results)} results")
        return results


__all__ = ["SearchAdapter", "SearchResult", "normalize_itunes", "normalize_tvmaze", "should_search"]
