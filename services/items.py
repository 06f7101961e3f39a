# services/items.py
# Watchboard - Watchlist item vocabulary, id generation and field validation
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

import secrets
import string
import time
from typing import Any, Collection, Literal, Mapping

MediaType = Literal["movie", "tv"]
Category = Literal["watching", "planning", "watched", "dropped"]

MEDIA_TYPES: tuple[str, ...] = ("movie", "tv")
CATEGORY_IDS: tuple[str, ...] = ("watching", "planning", "watched", "dropped")
EDITABLE_FIELDS: tuple[str, ...] = ("title", "poster", "type", "category", "score", "notes")
SCORE_MIN, SCORE_MAX = 1, 10

_B36 = string.digits + string.ascii_lowercase


def new_item_id(existing: Collection[str] = ()) -> str:
    """Millisecond timestamp plus nine random base-36 chars; redrawn on collision."""
    while True:
        ident = str(int(time.time() * 1000)) + "".join(secrets.choice(_B36) for _ in range(9))
        if ident not in existing:
            return ident


def is_valid_category(val: Any) -> bool:
    return isinstance(val, str) and val in CATEGORY_IDS


def is_valid_score(val: Any) -> bool:
    return isinstance(val, int) and not isinstance(val, bool) and SCORE_MIN <= val <= SCORE_MAX


def validate_fields(fields: Mapping[str, Any], *, partial: bool) -> dict[str, Any]:
    """
    Check and normalize item fields.

    Unknown keys and ``id`` are dropped. With ``partial=False`` the fields must
    describe a complete new item (title/type/category present). A ``score`` or
    ``notes`` of ``None`` is kept as ``None`` so callers can clear them.
    Raises ValueError on the first bad value.
    """
    out: dict[str, Any] = {}
    for key in EDITABLE_FIELDS:
        if key not in fields:
            continue
        val = fields[key]

        if key == "title":
            if not isinstance(val, str) or not val.strip():
                raise ValueError("title must be a non-empty string")
            out[key] = val
        elif key == "poster":
            out[key] = "" if val is None else str(val)
        elif key == "type":
            if val not in MEDIA_TYPES:
                raise ValueError(f"type must be one of {', '.join(MEDIA_TYPES)}")
            out[key] = val
        elif key == "category":
            if not is_valid_category(val):
                raise ValueError(f"category must be one of {', '.join(CATEGORY_IDS)}")
            out[key] = val
        elif key == "score":
            if val is not None and not is_valid_score(val):
                raise ValueError(f"score must be an integer {SCORE_MIN}-{SCORE_MAX}")
            out[key] = val
        elif key == "notes":
            out[key] = None if val is None else str(val)

    if not partial:
        for key in ("title", "type", "category"):
            if key not in out:
                raise ValueError(f"missing field: {key}")
        out.setdefault("poster", "")
    return out


__all__ = [
    "MediaType",
    "Category",
    "MEDIA_TYPES",
    "CATEGORY_IDS",
    "EDITABLE_FIELDS",
    "SCORE_MIN",
    "SCORE_MAX",
    "new_item_id",
    "is_valid_category",
    "is_valid_score",
    "validate_fields",
]
