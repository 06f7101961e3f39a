# services/__init__.py
from __future__ import annotations

from .add_panel import AddPanel, prepare_new_item
from .board import Board, reassign_category
from .debounce import Debouncer, LatestGate, SessionGates
from .edit_panel import DraftField, EditPanel
from .exchange import ImportFormatError, export_document, export_filename, parse_import
from .search import SearchAdapter, should_search
from .store import ItemStore

__all__ = [
    "AddPanel",
    "Board",
    "Debouncer",
    "DraftField",
    "EditPanel",
    "ImportFormatError",
    "ItemStore",
    "LatestGate",
    "SearchAdapter",
    "SessionGates",
    "export_document",
    "export_filename",
    "parse_import",
    "prepare_new_item",
    "reassign_category",
    "should_search",
]
