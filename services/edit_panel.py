# services/edit_panel.py
# Watchboard - Edit panel view model with explicit draft/commit per text field
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

from typing import Any, Mapping, Protocol

from _logging import log as _log
from .items import is_valid_score

log = _log.child("EDIT")

TEXT_FIELDS: tuple[str, ...] = ("title", "poster", "notes")


class _Store(Protocol):
    def get(self, item_id: str) -> dict[str, Any] | None: ...
    def update(self, item_id: str, partial: Mapping[str, Any]) -> dict[str, Any] | None: ...
    def delete(self, item_id: str) -> bool: ...


class DraftField:
    """A committed value plus the local edit that has not been committed yet."""

    __slots__ = ("committed", "draft")

    def __init__(self, value: str = "") -> None:
        self.committed = value
        self.draft = value

    @property
    def dirty(self) -> bool:
        return self.draft != self.committed

    def edit(self, value: str) -> None:
        self.draft = value

    def commit(self) -> str:
        self.committed = self.draft
        return self.committed

    def revert(self) -> None:
        self.draft = self.committed

    def reset(self, value: str) -> None:
        self.committed = value
        self.draft = value

    def __repr__(self) -> str:
        return f"DraftField(committed={self.committed!r}, draft={self.draft!r})"


class EditPanel:
    """
    Edit form bound to one item. Text fields are committed one at a time.

    The page script in ``ui_frontend`` mirrors this (commit on blur, blank title
    reverted, score toggle); keep the two in step.
    """

    def __init__(self, store: _Store) -> None:
        self.store = store
        self.item_id: str | None = None
        self.fields: dict[str, DraftField] = {name: DraftField() for name in TEXT_FIELDS}
        self.score: int | None = None

    @property
    def is_open(self) -> bool:
        return self.item_id is not None

    @property
    def title(self) -> DraftField:
        return self.fields["title"]

    @property
    def poster(self) -> DraftField:
        return self.fields["poster"]

    @property
    def notes(self) -> DraftField:
        return self.fields["notes"]

    def item(self) -> dict[str, Any] | None:
        return self.store.get(self.item_id) if self.item_id is not None else None

    def _load(self, item: Mapping[str, Any]) -> None:
        for name in TEXT_FIELDS:
            self.fields[name].reset(str(item.get(name) or ""))
        score = item.get("score")
        self.score = score if is_valid_score(score) else None

    def open(self, item_id: str) -> bool:
        item = self.store.get(item_id)
        if item is None:
            return False
        if item_id != self.item_id:
            self.item_id = item_id
            self._load(item)
        return True

    def close(self) -> None:
        # uncommitted drafts are dropped with the panel
        self.item_id = None
        self.score = None
        for f in self.fields.values():
            f.reset("")

    def edit(self, name: str, value: str) -> None:
        self._field(name).edit(value)

    def commit(self, name: str) -> bool:
        """Write one text field to the store. Returns True when the store changed."""
        field = self._field(name)
        if self.item_id is None or not field.dirty:
            return False
        if name == "title" and not field.draft.strip():
            log.debug("blank title rejected; draft reverted")
            field.revert()
            return False
        updated = self.store.update(self.item_id, {name: field.draft})
        if updated is None:
            self.close()
            return False
        field.commit()
        return True

    def commit_all(self) -> bool:
        changed = False
        for name in TEXT_FIELDS:
            changed = self.commit(name) or changed
        return changed

    def toggle_score(self, value: int) -> int | None:
        """Select ``value``; selecting the active score clears it. Commits immediately."""
        if not is_valid_score(value):
            raise ValueError("score must be an integer 1-10")
        if self.item_id is None:
            return None
        new_score = None if self.score == value else value
        if self.store.update(self.item_id, {"score": new_score}) is None:
            self.close()
            return None
        self.score = new_score
        return new_score

    def delete(self) -> bool:
        if self.item_id is None:
            return False
        removed = self.store.delete(self.item_id)
        self.close()
        return removed

    def _field(self, name: str) -> DraftField:
        try:
            return self.fields[name]
        except KeyError:
            raise ValueError(f"not an editable text field: {name!r}") from None


__all__ = ["DraftField", "EditPanel", "TEXT_FIELDS"]
