# /watchboard.py
# Watchboard - Personal movie / TV watchlist board
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

import socket
import time
from contextlib import asynccontextmanager
from typing import Any, Callable

import uvicorn
from fastapi import FastAPI, Request

from _logging import log as _log
from api import register as register_api
from services.debounce import SessionGates
from services.search import SearchAdapter
from services.store import ItemStore
from ui_frontend import register_favicons, register_ui_root
from wb_platform import CURRENT_VERSION
from wb_platform.config_base import CONFIG as CONFIG_DIR, load_config, storage_path

log = _log.child("WATCHBOARD")


def _is_debug_enabled(load_cfg: Callable[[], dict[str, Any]]) -> bool:
    try:
        return bool((load_cfg().get("runtime") or {}).get("debug"))
    except Exception:
        return False


def create_app(
    store: ItemStore | None = None,
    searcher: SearchAdapter | None = None,
    load_cfg: Callable[[], dict[str, Any]] = load_config,
) -> FastAPI:
    """Build the app. An injected store is used as-is; the default one is loaded at startup."""
    autoload = store is None
    store = store if store is not None else ItemStore(storage_path(load_cfg()))
    searcher = searcher if searcher is not None else SearchAdapter(load_cfg)

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        if autoload:
            app.state.store.load()
        log.info(f"watchlist ready: {len(app.state.store)} items ({app.state.store.path})")
        yield

    app = FastAPI(title="Watchboard", version=CURRENT_VERSION, lifespan=_lifespan)
    app.state.store = store
    app.state.searcher = searcher
    app.state.search_gates = SessionGates()
    app.state.load_config = load_cfg

    @app.middleware("http")
    async def conditional_access_logger(request: Request, call_next):
        t0 = time.time()
        response = await call_next(request)
        status = getattr(response, "status_code", 0) or 0
        if status >= 500 or (status >= 400 and _is_debug_enabled(load_cfg)):
            dt_ms = int((time.time() - t0) * 1000)
            client = request.client
            host = f"{client.host}:{client.port}" if client else "-"
            log.warn(f'{host} - "{request.method} {request.url.path}" {status} ({dt_ms} ms)')
        return response

    # Middleware to disable caching for API responses
    @app.middleware("http")
    async def cache_headers_for_api(request: Request, call_next):
        resp = await call_next(request)
        if request.url.path.startswith("/api/"):
            resp.headers["Cache-Control"] = "no-store"
            resp.headers["Pragma"] = "no-cache"
            resp.headers["Expires"] = "0"
        return resp

    register_favicons(app)
    register_ui_root(app)
    register_api(app)
    return app


def get_primary_ip() -> str:
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        return s.getsockname()[0]
    except Exception:
        return "127.0.0.1"
    finally:
        s.close()


# Entry point
def main(host: str | None = None, port: int | None = None) -> None:
    cfg = load_config()
    _log.configure(cfg)
    ui = cfg.get("ui") or {}
    host = host or str(ui.get("host") or "0.0.0.0")
    port = int(port or ui.get("port") or 8790)

    print("\nWatchboard running:")
    print(f"  Local:   http://127.0.0.1:{port}")
    print(f"  LAN:     http://{get_primary_ip()}:{port}")
    print(f"  Bind:    {host}:{port}")
    print(f"  Config:  {CONFIG_DIR / 'config.json'} (JSON)")
    print(f"  Data:    {storage_path(cfg)}\n")

    debug = bool((cfg.get("runtime") or {}).get("debug"))
    debug_http = bool((cfg.get("runtime") or {}).get("debug_http"))

    uvicorn.run(
        create_app(load_cfg=load_config),
        host=host,
        port=port,
        log_level=("debug" if debug else "warning"),
        access_log=debug_http,
    )


if __name__ == "__main__":
    main()
