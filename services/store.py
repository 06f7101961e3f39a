# services/store.py
# Watchboard - Item store: ordered watchlist entries mirrored to one JSON file
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

import copy
import json
import threading
from pathlib import Path
from typing import Any, Mapping

from _logging import log as _log
from wb_platform.config_base import write_json_atomic

from .board import reassign_category
from .exchange import ImportFormatError
from .items import is_valid_category, new_item_id, validate_fields
from .seed import seed_items

log = _log.child("STORE")


def _read_items(path: Path) -> list[Any] | None:
    """Stored array, or None when the file is missing, unreadable or not an array of objects."""
    try:
        if not path.exists():
            return None
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception as e:
        log.debug(f"unreadable watchlist at {path}: {e}")
        return None
    if not isinstance(data, list) or not all(isinstance(it, dict) for it in data):
        return None
    return data


class ItemStore:
    """
    In-memory watchlist synchronized to ``path``.

    Every mutation rewrites the whole collection. A write is skipped while the
    collection is empty so a half-initialized store never clobbers the file.
    Reads hand out copies; the only way to change items is through the methods
    below.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._items: list[Any] = []
        self._lock = threading.RLock()

    # ----- loading / persistence
    def load(self) -> list[dict[str, Any]]:
        with self._lock:
            stored = _read_items(self.path)
            if stored is None:
                log.info(f"no valid watchlist at {self.path}; using seed data")
                self._items = seed_items()
                self._persist()
            else:
                self._items = stored
                log.debug(f"loaded {len(stored)} items from {self.path}")
            return self.items()

    def _persist(self) -> None:
        if not self._items:
            log.debug("empty watchlist; write skipped")
            return
        try:
            write_json_atomic(self.path, self._items)
        except Exception as e:
            log.error(f"failed to write {self.path}: {e}")

    # ----- reads
    def items(self) -> list[dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._items)

    def get(self, item_id: str) -> dict[str, Any] | None:
        with self._lock:
            idx = self._index(item_id)
            return copy.deepcopy(self._items[idx]) if idx is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _index(self, item_id: str) -> int | None:
        for i, it in enumerate(self._items):
            if isinstance(it, dict) and it.get("id") is not None and str(it.get("id")) == item_id:
                return i
        return None

    def _ids(self) -> set[str]:
        return {str(it.get("id")) for it in self._items if isinstance(it, dict) and it.get("id") is not None}

    # ----- mutations
    def add(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        clean = validate_fields(fields, partial=False)
        with self._lock:
            item: dict[str, Any] = {"id": new_item_id(self._ids())}
            for key, val in clean.items():
                if val is not None:
                    item[key] = val
            self._items.append(item)
            self._persist()
            log.info(f"added {item['type']} '{item['title']}' to {item['category']}")
            return copy.deepcopy(item)

    def update(self, item_id: str, partial: Mapping[str, Any]) -> dict[str, Any] | None:
        """Merge ``partial`` into the item. Returns the updated copy, or None if absent."""
        clean = validate_fields(partial, partial=True)
        with self._lock:
            idx = self._index(item_id)
            if idx is None:
                return None
            merged = dict(self._items[idx])
            for key, val in clean.items():
                if val is None:
                    merged.pop(key, None)
                else:
                    merged[key] = val
            self._items[idx] = merged
            self._persist()
            return copy.deepcopy(merged)

    def move(self, item_id: str, category: str) -> dict[str, Any] | None:
        if not is_valid_category(category):
            raise ValueError(f"unknown category: {category!r}")
        with self._lock:
            if self._index(item_id) is None:
                return None
            self._items = reassign_category(self._items, item_id, category)
            self._persist()
            return self.get(item_id)

    def delete(self, item_id: str) -> bool:
        with self._lock:
            idx = self._index(item_id)
            if idx is None:
                return False
            gone = self._items.pop(idx)
            self._persist()
            log.info(f"deleted '{gone.get('title', item_id)}'")
            return True

    def replace_all(self, items: Any) -> int:
        if not isinstance(items, list):
            raise ImportFormatError()
        with self._lock:
            self._items = copy.deepcopy(items)
            self._persist()
            log.info(f"replaced watchlist with {len(items)} items")
            return len(self._items)


__all__ = ["ItemStore"]
