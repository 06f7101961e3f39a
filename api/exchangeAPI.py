# api/exchangeAPI.py
# Watchboard - Watchlist export / import API
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from fastapi.responses import Response

from _logging import log as _log
from services.exchange import ImportFormatError, export_document, export_filename, parse_import

log = _log.child("EXCHANGE")

router = APIRouter(prefix="/api", tags=["exchange"])


@router.get("/export")
def api_export(request: Request) -> Response:
    items = request.app.state.store.items()
    name = export_filename()
    return Response(
        content=export_document(items),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )


@router.post("/import")
async def api_import(request: Request, file: UploadFile = File(...)) -> dict[str, Any]:
    payload = await file.read()
    try:
        items = parse_import(payload)
        count = request.app.state.store.replace_all(items)
    except ImportFormatError as e:
        log.warn(f"import of {file.filename or 'upload'} rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    return {"ok": True, "count": count}
