# services/exchange.py
# Watchboard - JSON export / import of the whole watchlist
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

import json
from datetime import date, datetime, timezone
from typing import Any

INVALID_FORMAT = "Invalid file format"


class ImportFormatError(ValueError):
    """Imported content is not a JSON array."""

    def __init__(self, message: str = INVALID_FORMAT) -> None:
        super().__init__(message)


def export_filename(today: date | None = None) -> str:
    d = today or datetime.now(timezone.utc).date()
    return f"watchlist-{d.isoformat()}.json"


def export_document(items: list[Any]) -> str:
    return json.dumps(list(items or []), indent=2, ensure_ascii=False)


def parse_import(raw: bytes | str) -> list[Any]:
    """Decode an uploaded watchlist. Only the top-level array shape is checked."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ImportFormatError() from e
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ImportFormatError() from e
    if not isinstance(data, list):
        raise ImportFormatError()
    return data


__all__ = ["ImportFormatError", "INVALID_FORMAT", "export_filename", "export_document", "parse_import"]
