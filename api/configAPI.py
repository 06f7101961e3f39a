# api/configAPI.py
# Watchboard - Configuration API
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from wb_platform import config_base


def _nostore(res: JSONResponse) -> JSONResponse:
    res.headers["Cache-Control"] = "no-store"
    return res

router = APIRouter(prefix="/api", tags=["config"])

@router.get("/config")
def api_config(request: Request) -> JSONResponse:
    cfg = dict(request.app.state.load_config() or {})
    return _nostore(JSONResponse(cfg))

@router.post("/config")
def api_config_save(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    incoming = {k: v for k, v in (payload or {}).items() if isinstance(v, dict)}
    cfg = config_base.merge_config(incoming)
    return {"ok": True, "config": cfg}
