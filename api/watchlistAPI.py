# api/watchlistAPI.py
# Watchboard - Watchlist items and board API
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

import urllib.parse
from typing import Any, Literal

from fastapi import APIRouter, Body, HTTPException, Path as FPath, Query, Request
from pydantic import BaseModel, Field

from _logging import log as _log
from services.add_panel import prepare_new_item
from services.board import Board
from services.store import ItemStore

log = _log.child("API")

router = APIRouter(prefix="/api", tags=["watchlist"])


class ItemIn(BaseModel):
    title: str = ""
    poster: str | None = None
    type: Literal["movie", "tv"] | None = None
    category: Literal["watching", "planning", "watched", "dropped"] | None = None


class ItemPatch(BaseModel):
    title: str | None = None
    poster: str | None = None
    type: Literal["movie", "tv"] | None = None
    category: Literal["watching", "planning", "watched", "dropped"] | None = None
    score: int | None = Field(default=None, ge=1, le=10)
    notes: str | None = None


class MoveIn(BaseModel):
    category: str | None = None


def _store(request: Request) -> ItemStore:
    return request.app.state.store


def _items_cfg(request: Request) -> dict[str, Any]:
    cfg = request.app.state.load_config() or {}
    return cfg.get("items") or {}


def _norm_id(item_id: str) -> str:
    s = (item_id or "").strip()
    return urllib.parse.unquote(s) if "%" in s else s


@router.get("/items")
def api_items_list(request: Request) -> dict[str, Any]:
    items = _store(request).items()
    return {"ok": True, "count": len(items), "items": items}


@router.get("/items/{item_id}")
def api_items_get(request: Request, item_id: str = FPath(...)) -> dict[str, Any]:
    item = _store(request).get(_norm_id(item_id))
    if item is None:
        raise HTTPException(status_code=404, detail="item not found")
    return {"ok": True, "item": item}


@router.post("/items")
def api_items_add(request: Request, payload: ItemIn = Body(...)) -> dict[str, Any]:
    ic = _items_cfg(request)
    fields = prepare_new_item(
        payload.title,
        payload.poster,
        payload.type or str(ic.get("default_type") or "movie"),
        payload.category or str(ic.get("default_category") or "planning"),
        str(ic.get("placeholder_poster") or ""),
    )
    if fields is None:
        log.debug("add rejected: blank title")
        raise HTTPException(status_code=400, detail="title is required")
    try:
        item = _store(request).add(fields)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "item": item}


@router.patch("/items/{item_id}")
def api_items_update(
    request: Request,
    item_id: str = FPath(...),
    payload: ItemPatch = Body(...),
) -> dict[str, Any]:
    partial = payload.model_dump(exclude_unset=True)
    try:
        item = _store(request).update(_norm_id(item_id), partial)
    except ValueError as e:
        log.debug(f"update of {item_id} rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    if item is None:
        raise HTTPException(status_code=404, detail="item not found")
    return {"ok": True, "item": item}


@router.delete("/items/{item_id}")
def api_items_delete(request: Request, item_id: str = FPath(...)) -> dict[str, Any]:
    if not _store(request).delete(_norm_id(item_id)):
        raise HTTPException(status_code=404, detail="item not found")
    return {"ok": True, "deleted": _norm_id(item_id)}


@router.post("/items/{item_id}/move")
def api_items_move(
    request: Request,
    item_id: str = FPath(...),
    payload: MoveIn = Body(...),
) -> dict[str, Any]:
    key = _norm_id(item_id)
    store = _store(request)
    if store.get(key) is None:
        raise HTTPException(status_code=404, detail="item not found")
    try:
        moved = Board(store).drop(key, payload.category)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "moved": moved, "item": store.get(key)}


@router.get("/board")
def api_board(
    request: Request,
    watching: str = Query("all"),
    planning: str = Query("all"),
    watched: str = Query("all"),
    dropped: str = Query("all"),
) -> dict[str, Any]:
    board = Board(_store(request))
    try:
        for cid, flt in (("watching", watching), ("planning", planning), ("watched", watched), ("dropped", dropped)):
            board.set_filter(cid, flt)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "columns": board.columns()}
