# api/searchAPI.py
# Watchboard - Title search API (iTunes + TVMaze)
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, Request

from services.search import should_search

router = APIRouter(prefix="/api", tags=["search"])


@router.get("/search")
def api_search(
    request: Request,
    q: str = Query("", description="Free-text title query"),
    sid: str = Query("", description="Client session id; only its newest query is answered"),
) -> dict[str, Any]:
    searcher = request.app.state.searcher
    if not should_search(q, False, searcher.min_query_length()):
        return {"ok": True, "query": q, "stale": False, "results": []}

    gate = request.app.state.search_gates.gate(sid or "-")
    token = gate.begin()
    results = searcher.search(q)
    if not gate.is_latest(token):
        return {"ok": True, "query": q, "stale": True, "results": []}
    return {"ok": True, "query": q, "stale": False, "results": results}
