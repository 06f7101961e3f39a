# services/board.py
# Watchboard - Board view model: category columns, type filters, drop/select handling
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

from typing import Any, Iterable, Literal, Protocol

from _logging import log as _log
from .items import CATEGORY_IDS, is_valid_category

log = _log.child("BOARD")

TypeFilter = Literal["all", "movie", "tv"]
TYPE_FILTERS: tuple[str, ...] = ("all", "movie", "tv")

CATEGORIES: tuple[dict[str, str], ...] = (
    {"id": "watching", "title": "Currently Watching"},
    {"id": "planning", "title": "Planning to Watch"},
    {"id": "watched", "title": "Watched"},
    {"id": "dropped", "title": "Dropped"},
)


class _Store(Protocol):
    def items(self) -> list[dict[str, Any]]: ...
    def get(self, item_id: str) -> dict[str, Any] | None: ...
    def move(self, item_id: str, category: str) -> dict[str, Any] | None: ...


class _Opener(Protocol):
    def open(self, item_id: str) -> bool: ...


def reassign_category(items: Iterable[Any], item_id: str, category: str) -> list[Any]:
    """
    Return a new list where only the item with ``item_id`` has its category set.
    Other entries are passed through untouched. An unknown id yields an equal list.
    """
    if not is_valid_category(category):
        raise ValueError(f"category must be one of {', '.join(CATEGORY_IDS)}")
    out: list[Any] = []
    for it in items:
        if isinstance(it, dict) and it.get("id") is not None and str(it.get("id")) == item_id:
            moved = dict(it)
            moved["category"] = category
            out.append(moved)
        else:
            out.append(it)
    return out


def group_by_category(items: Iterable[Any]) -> dict[str, list[dict[str, Any]]]:
    groups: dict[str, list[dict[str, Any]]] = {cid: [] for cid in CATEGORY_IDS}
    for it in items:
        if not isinstance(it, dict):
            continue
        bucket = groups.get(str(it.get("category") or ""))
        if bucket is not None:
            bucket.append(it)
    return groups


def filter_by_type(items: Iterable[dict[str, Any]], type_filter: str) -> list[dict[str, Any]]:
    if type_filter == "all":
        return list(items)
    return [it for it in items if it.get("type") == type_filter]


def normalize_filter(val: Any) -> str:
    s = str(val or "all").strip().lower()
    if s in ("movies", "film", "films"):
        s = "movie"
    elif s in ("show", "shows", "series"):
        s = "tv"
    if s not in TYPE_FILTERS:
        raise ValueError(f"filter must be one of {', '.join(TYPE_FILTERS)}")
    return s


class Board:
    """Four category columns over an injected store, each with its own type filter."""

    def __init__(self, store: _Store, edit_panel: _Opener | None = None) -> None:
        self.store = store
        self.edit_panel = edit_panel
        self.filters: dict[str, str] = {cid: "all" for cid in CATEGORY_IDS}

    def set_filter(self, category: str, type_filter: str) -> None:
        if not is_valid_category(category):
            raise ValueError(f"unknown category: {category!r}")
        self.filters[category] = normalize_filter(type_filter)

    def columns(self) -> list[dict[str, Any]]:
        groups = group_by_category(self.store.items())
        out: list[dict[str, Any]] = []
        for cat in CATEGORIES:
            cid = cat["id"]
            flt = self.filters[cid]
            rows = filter_by_type(groups[cid], flt)
            out.append({"id": cid, "title": cat["title"], "filter": flt, "count": len(rows), "items": rows})
        return out

    def drop(self, item_id: str, destination: str | None) -> bool:
        """Handle the end of a drag. Returns True when the item changed column."""
        if destination is None:
            return False
        if not is_valid_category(destination):
            log.debug(f"drop on unknown column {destination!r} ignored")
            return False
        current = self.store.get(item_id)
        if current is None or current.get("category") == destination:
            return False
        self.store.move(item_id, destination)
        log.debug(f"moved {item_id} {current.get('category')} -> {destination}")
        return True

    def select(self, item_id: str) -> bool:
        if self.edit_panel is None:
            return False
        return self.edit_panel.open(item_id)


__all__ = [
    "Board",
    "CATEGORIES",
    "TYPE_FILTERS",
    "TypeFilter",
    "filter_by_type",
    "group_by_category",
    "normalize_filter",
    "reassign_category",
]
