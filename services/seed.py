# services/seed.py
# Watchboard - Built-in example collection used on first run
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

import copy
from typing import Any

_TMDB_W500 = "https://image.tmdb.org/t/p/w500"

SEED_ITEMS: tuple[dict[str, Any], ...] = (
    {"id": "1", "title": "Inception", "poster": f"{_TMDB_W500}/ljsZTbVsrQSqZgWeep2B1QiDKuh.jpg",
     "type": "movie", "category": "watched", "score": 9, "notes": "Mind-bending masterpiece"},
    {"id": "2", "title": "The Matrix", "poster": f"{_TMDB_W500}/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg",
     "type": "movie", "category": "watched", "score": 10, "notes": "Revolutionary"},
    {"id": "3", "title": "Interstellar", "poster": f"{_TMDB_W500}/gEU2QniE6E77NI6lCU6MxlNBvIx.jpg",
     "type": "movie", "category": "watched", "score": 9},
    {"id": "4", "title": "Breaking Bad", "poster": f"{_TMDB_W500}/3xnWaLQjelJDDF7LT1WBo6f4BRe.jpg",
     "type": "tv", "category": "watching", "score": 10, "notes": "Best TV show ever"},
    {"id": "5", "title": "Stranger Things", "poster": f"{_TMDB_W500}/x2LSRK2Cm7MZhjluni1msVJ3wDF.jpg",
     "type": "tv", "category": "watching", "score": 8},
    {"id": "6", "title": "The Crown", "poster": f"{_TMDB_W500}/1M876KPjulVwppEpldhdc8V4o68.jpg",
     "type": "tv", "category": "watching", "score": 7},
    {"id": "7", "title": "Dune: Part Two", "poster": f"{_TMDB_W500}/1pdfLvkbY9ohJlCjQH2CZjjYVvJ.jpg",
     "type": "movie", "category": "planning", "notes": "Waiting for streaming"},
    {"id": "8", "title": "Oppenheimer", "poster": f"{_TMDB_W500}/8Gxv8gSFCU0XGDykEGv7zR1n2ua.jpg",
     "type": "movie", "category": "planning"},
    {"id": "9", "title": "The Last of Us", "poster": f"{_TMDB_W500}/uKvVjHNqB5VmOrdxqAt2F7J78ED.jpg",
     "type": "tv", "category": "planning", "notes": "Heard great things"},
    {"id": "10", "title": "Avatar: The Way of Water", "poster": f"{_TMDB_W500}/t6HIqrRAclMCA60NsSmeqe9RmNV.jpg",
     "type": "movie", "category": "dropped", "score": 5, "notes": "Too long"},
    {"id": "11", "title": "House of the Dragon", "poster": f"{_TMDB_W500}/7QMsOTMUswARwMMzjzw0KYkrmg5.jpg",
     "type": "tv", "category": "dropped", "score": 6, "notes": "Not as good as GoT"},
    {"id": "12", "title": "The Witcher", "poster": f"{_TMDB_W500}/7vjaCdMw15FEbXyLQTVa04URsPm.jpg",
     "type": "tv", "category": "dropped", "score": 5},
)


def seed_items() -> list[dict[str, Any]]:
    """Fresh copy of the seed collection; callers may mutate it freely."""
    return copy.deepcopy(list(SEED_ITEMS))
