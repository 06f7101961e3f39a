# services/add_panel.py
# Watchboard - Add panel view model (search-assisted or manual entry)
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

import threading
from typing import Any, Callable, Mapping, Protocol

from _logging import log as _log
from wb_platform.config_base import DEFAULT_CFG, PLACEHOLDER_POSTER

from .debounce import Debouncer, LatestGate, TimerFactory
from .items import CATEGORY_IDS, MEDIA_TYPES
from .search import SearchResult, should_search

log = _log.child("ADD")


class _Store(Protocol):
    def add(self, fields: Mapping[str, Any]) -> dict[str, Any]: ...


class _Searcher(Protocol):
    def search(self, query: str) -> list[SearchResult]: ...


def prepare_new_item(
    title: Any,
    poster: Any,
    typ: str,
    category: str,
    placeholder: str = PLACEHOLDER_POSTER,
) -> dict[str, Any] | None:
    """Fields for a new item, or None when the title is blank after trimming."""
    t = str(title or "").strip()
    if not t:
        return None
    p = str(poster or "").strip() or placeholder
    return {"title": t, "poster": p, "type": typ, "category": category}


class AddPanel:
    """
    Add form state: search-assisted or manual entry, type and category pickers.

    The page script in ``ui_frontend`` mirrors this flow in the browser (debounce,
    stale-result drop, blank-title no-op); keep the two in step.
    """

    def __init__(
        self,
        store: _Store,
        searcher: _Searcher,
        cfg: Mapping[str, Any] | None = None,
        *,
        timer_factory: TimerFactory | None = None,
        on_results: Callable[[list[SearchResult]], None] | None = None,
    ) -> None:
        cfg = cfg or DEFAULT_CFG
        sc = {**DEFAULT_CFG["search"], **(cfg.get("search") or {})}
        ic = {**DEFAULT_CFG["items"], **(cfg.get("items") or {})}

        self.store = store
        self.searcher = searcher
        self.on_results = on_results
        self.min_query_length = int(sc["min_query_length"])
        self.placeholder = str(ic["placeholder_poster"])
        self.default_type = str(ic["default_type"])
        self.default_category = str(ic["default_category"])

        self.query = ""
        self.manual_mode = False
        self.manual_title = ""
        self.manual_poster = ""
        self.selected_type = self.default_type
        self.selected_category = self.default_category
        self.results: list[SearchResult] = []
        self.show_results = False

        self._gate = LatestGate()
        self._lock = threading.Lock()
        self._debouncer = Debouncer(
            int(sc["debounce_ms"]) / 1000.0, self._run_search, timer_factory=timer_factory
        )

    # ----- search
    def set_query(self, text: str) -> None:
        self.query = text or ""
        self._refresh_search()

    def set_manual_mode(self, on: bool) -> None:
        self.manual_mode = bool(on)
        self._refresh_search()

    def _refresh_search(self) -> None:
        if should_search(self.query, self.manual_mode, self.min_query_length):
            self._debouncer.call(self.query, self._gate.begin())
        else:
            self._debouncer.cancel()
            self._gate.invalidate()
            self._apply([])

    def _run_search(self, query: str, token: int) -> None:
        results = self.searcher.search(query)
        if not self._gate.is_latest(token):
            log.debug(f"dropping stale results for {query!r}")
            return
        self._apply(results)

    def _apply(self, results: list[SearchResult]) -> None:
        with self._lock:
            self.results = list(results)
            self.show_results = bool(self.results)
        if self.on_results is not None:
            self.on_results(self.results)

    def select_result(self, result: Mapping[str, Any]) -> None:
        self._debouncer.cancel()
        self._gate.invalidate()
        title = str(result.get("title") or "")
        self.query = title
        self.manual_title = title
        self.manual_poster = str(result.get("poster") or "")
        typ = result.get("type")
        if typ in MEDIA_TYPES:
            self.selected_type = str(typ)
        self.show_results = False

    # ----- form
    def set_type(self, typ: str) -> None:
        if typ not in MEDIA_TYPES:
            raise ValueError(f"type must be one of {', '.join(MEDIA_TYPES)}")
        self.selected_type = typ

    def set_category(self, category: str) -> None:
        if category not in CATEGORY_IDS:
            raise ValueError(f"category must be one of {', '.join(CATEGORY_IDS)}")
        self.selected_category = category

    def submit(self) -> dict[str, Any] | None:
        title = self.manual_title if self.manual_mode else self.query
        fields = prepare_new_item(
            title, self.manual_poster, self.selected_type, self.selected_category, self.placeholder
        )
        if fields is None:
            return None
        item = self.store.add(fields)
        self.reset()
        return item

    def reset(self) -> None:
        self._debouncer.cancel()
        self._gate.invalidate()
        self.query = ""
        self.manual_title = ""
        self.manual_poster = ""
        self.manual_mode = False
        self._apply([])


__all__ = ["AddPanel", "prepare_new_item"]
