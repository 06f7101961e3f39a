# Watchboard test scripts
from __future__ import annotations

import json
from datetime import date

import pytest

from services.exchange import INVALID_FORMAT, ImportFormatError, export_document, export_filename, parse_import


def test_export_filename() -> None:
    assert export_filename(date(2026, 3, 1)) == "watchlist-2026-03-01.json"
    assert export_filename().startswith("watchlist-")


def test_export_document_is_indented_array() -> None:
    items = [{"id": "1", "title": "Amélie", "type": "movie", "category": "watched"}]
    doc = export_document(items)
    assert doc.startswith("[\n  {")
    assert "Amélie" in doc
    assert json.loads(doc) == items


def test_parse_import_accepts_arrays() -> None:
    assert parse_import(b'[{"id": "1"}]') == [{"id": "1"}]
    assert parse_import("[]") == []
    assert parse_import("\ufeff[1, 2]".encode("utf-8")) == [1, 2]


@pytest.mark.parametrize("raw", [b"{}", b'"x"', b"not json", b"\xff\xfe\x00", ""])
def test_parse_import_rejects(raw) -> None:
    with pytest.raises(ImportFormatError) as ei:
        parse_import(raw)
    assert str(ei.value) == INVALID_FORMAT
