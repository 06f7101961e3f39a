from __future__ import annotations

from fastapi import FastAPI

from .configAPI import router as config_router
from .exchangeAPI import router as exchange_router
from .searchAPI import router as search_router
from .watchlistAPI import router as watchlist_router

__all__ = [
    "config_router",
    "exchange_router",
    "search_router",
    "watchlist_router",
    "register",
]

def register(app: FastAPI) -> None:
    app.include_router(config_router)
    app.include_router(watchlist_router)
    app.include_router(search_router)
    app.include_router(exchange_router)
