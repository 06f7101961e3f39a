# wb_platform/config_base.py
# Watchboard - Configuration base (paths, defaults, load/save)
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict

# ------------------------------------------------------------
# Base dir resolution
# ------------------------------------------------------------
def CONFIG_BASE() -> Path:
    """
    Determine the base directory for config and data files.

    Priority:
      1) $CONFIG_BASE if set
      2) /config (when running in container that mounts /config)
      3) Project root (two levels up from this file)
    """
    env = os.getenv("CONFIG_BASE")
    if env:
        return Path(env)

    if Path("/app").exists():
        return Path("/config")

    return Path(__file__).resolve().parents[1]

CONFIG: Path = CONFIG_BASE()
CONFIG.mkdir(parents=True, exist_ok=True)

PLACEHOLDER_POSTER = "https://via.placeholder.com/500x750/1a1a1a/ffffff?text=No+Poster"

# Default config structure
DEFAULT_CFG: Dict[str, Any] = {
    # --- Storage -------------------------------------------------------------
    "storage": {
        "key": "watchlist",                             # Items live in CONFIG/<key>.json (one JSON array)
    },

    # --- Items / Add panel ---------------------------------------------------
    "items": {
        "placeholder_poster": PLACEHOLDER_POSTER,       # Used when an item is added without a poster
        "default_type": "movie",                        # "movie" | "tv"
        "default_category": "planning",                 # "watching" | "planning" | "watched" | "dropped"
    },

    # --- Search (iTunes movies + TVMaze shows) -------------------------------
    "search": {
        "debounce_ms": 300,                             # Inactivity window before a search is issued
        "min_query_length": 3,                          # Queries shorter than this never hit the network
        "movie_limit": 5,                               # iTunes result cap (sent as ?limit=)
        "tv_limit": 5,                                  # TVMaze results kept (client-side slice)
        "timeout": 10,                                  # HTTP timeout (seconds) per source
        "itunes_url": "https://itunes.apple.com/search",
        "tvmaze_url": "https://api.tvmaze.com/search/shows",
        "user_agent": "Watchboard/1.0",
    },

    # --- Runtime / Diagnostics ----------------------------------------------
    "runtime": {
        "debug": False,                                 # Extra verbose logging (debug level)
        "debug_http": False,                            # uvicorn access log
        "log_file": "",                                 # Optional JSON-lines log file (appended)
    },

    # --- UI / server ---------------------------------------------------------
    "ui": {
        "host": "0.0.0.0",
        "port": 8790,
    },
}


# ------------------------------------------------------------
# Helpers: paths, IO, merging
# ------------------------------------------------------------
def _cfg_file() -> Path:
    return CONFIG / "config.json"

def config_path() -> Path:
    """Public accessor for the config file location."""
    return _cfg_file()


def _read_json(p: Path) -> Dict[str, Any]:
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json_atomic(p: Path, data: Any) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    import secrets, threading, time
    suffix = f".{time.time_ns()}.{os.getpid()}.{threading.get_ident()}.{secrets.token_hex(4)}.tmp"
    tmp = p.with_suffix(suffix)

    with tmp.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")
    tmp.replace(p)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)  # type: ignore[assignment]
        else:
            out[k] = v
    return out


def _normalize_search(val: Dict[str, Any]) -> Dict[str, Any]:
    v = dict(val or {})
    defaults = DEFAULT_CFG["search"]
    for key in ("debounce_ms", "min_query_length", "movie_limit", "tv_limit"):
        try:
            v[key] = max(0, int(v.get(key, defaults[key])))
        except (TypeError, ValueError):
            v[key] = defaults[key]
    try:
        v["timeout"] = float(v.get("timeout", defaults["timeout"]))
    except (TypeError, ValueError):
        v["timeout"] = defaults["timeout"]
    return v


# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Read config.json merged over the defaults.
    """
    p = _cfg_file()
    user_cfg: Dict[str, Any] = {}
    if p.exists():
        try:
            user_cfg = _read_json(p)
        except Exception:
            user_cfg = {}
    if not isinstance(user_cfg, dict):
        user_cfg = {}

    cfg = _deep_merge(DEFAULT_CFG, user_cfg)
    cfg["search"] = _normalize_search(cfg.get("search") or {})
    return cfg


def save_config(cfg: Dict[str, Any]) -> None:
    """
    Write to config.json
    """
    data = dict(cfg or {})
    if isinstance(data.get("search"), dict):
        data["search"] = _normalize_search(data["search"])
    write_json_atomic(_cfg_file(), data)


def merge_config(patch: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge a partial config into the stored one and persist it."""
    merged = _deep_merge(load_config(), patch or {})
    save_config(merged)
    return load_config()


def storage_path(cfg: Dict[str, Any] | None = None) -> Path:
    cfg = cfg if cfg is not None else load_config()
    key = str((cfg.get("storage") or {}).get("key") or "watchlist").strip() or "watchlist"
    key = key.replace("/", "_").replace("\\", "_")
    return CONFIG / f"{key}.json"


__all__ = [
    "CONFIG",
    "CONFIG_BASE",
    "DEFAULT_CFG",
    "PLACEHOLDER_POSTER",
    "config_path",
    "load_config",
    "save_config",
    "merge_config",
    "storage_path",
    "write_json_atomic",
]
