# _logging.py
# Watchboard - Structured logger with colored console output and optional JSON file output.
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations
import sys, datetime, json, threading, time
from typing import Any, Optional, TextIO, Mapping, Dict

RESET = "\033[0m"
DIM = "\033[90m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[33m"
BLUE = "\033[94m"

LEVELS = {"silent": 60, "error": 40, "warn": 30, "info": 20, "debug": 10}

LEVEL_COLORS = {"DEBUG": YELLOW, "INFO": BLUE, "WARN": YELLOW, "ERROR": RED, "SUCCESS": GREEN}

# runtime.debug from config.json, re-read at most every 5s
_CFG_CACHE: Dict[str, Any] | None = None
_CFG_TS: float = 0.0

def _runtime() -> Dict[str, Any]:
    global _CFG_CACHE, _CFG_TS
    now = time.time()
    if _CFG_CACHE is None or (now - _CFG_TS) > 5.0:
        try:
            from wb_platform.config_base import config_path
            with open(config_path(), "r", encoding="utf-8") as f:
                _CFG_CACHE = json.load(f)
        except Exception:
            _CFG_CACHE = {}
        _CFG_TS = now
    rt = (_CFG_CACHE or {}).get("runtime") if isinstance(_CFG_CACHE, dict) else None
    return rt if isinstance(rt, dict) else {}

def _debug_enabled() -> bool:
    return bool(_runtime().get("debug"))

def reset_debug_cache() -> None:
    global _CFG_CACHE, _CFG_TS
    _CFG_CACHE = None
    _CFG_TS = 0.0


class _Sink:
    """Output shared by a root logger and every child derived from it."""

    def __init__(self, stream: TextIO, level: str, use_color: bool, show_time: bool, time_fmt: str) -> None:
        self.stream = stream
        self.level_no = LEVELS.get(level, 20)
        self.use_color = use_color
        self.show_time = show_time
        self.time_fmt = time_fmt
        self.json_stream: Optional[TextIO] = None
        self.json_path: Optional[str] = None
        self.lock = threading.Lock()

    def write(self, line: str, record: Optional[Dict[str, Any]]) -> None:
        with self.lock:
            self.stream.write(line + "\n")
            self.stream.flush()
            if self.json_stream is not None and record is not None:
                self.json_stream.write(json.dumps(record, ensure_ascii=False) + "\n")
                self.json_stream.flush()


class Logger:
    def __init__(
        self,
        stream: Optional[TextIO] = None,
        level: str = "info",
        use_color: bool = True,
        show_time: bool = True,
        time_fmt: str = "%Y-%m-%d %H:%M:%S",
        *,
        _sink: Optional[_Sink] = None,
        _context: Optional[Dict[str, Any]] = None,
    ):
        self._sink = _sink or _Sink(stream or sys.stdout, level, use_color, show_time, time_fmt)
        self._context: Dict[str, Any] = dict(_context or {})

    # Configuration (shared with children)
    def set_level(self, level: str) -> None:
        self._sink.level_no = LEVELS.get(level, self._sink.level_no)

    def enable_json(self, file_path: str) -> None:
        if self._sink.json_path == file_path:
            return
        with self._sink.lock:
            if self._sink.json_stream is not None:
                self._sink.json_stream.close()
            self._sink.json_stream = open(file_path, "a", encoding="utf-8")
            self._sink.json_path = file_path

    def configure(self, cfg: Mapping[str, Any]) -> None:
        """Apply the ``runtime`` config section: debug level and optional JSON log file."""
        rt = cfg.get("runtime") or {}
        if rt.get("debug"):
            self.set_level("debug")
        log_file = str(rt.get("log_file") or "").strip()
        if log_file:
            self.enable_json(log_file)

    # Context
    def bind(self, **ctx: Any) -> "Logger":
        return Logger(_sink=self._sink, _context={**self._context, **ctx})

    def child(self, name: str) -> "Logger":
        return self.bind(module=name)

    @property
    def level_name(self) -> str:
        for k, v in LEVELS.items():
            if v == self._sink.level_no:
                return k
        return "info"

    # Formatting
    def _fmt_text(self, display_level: str, msg: str) -> str:
        sink = self._sink
        mod = str(self._context.get("module") or "").strip()
        col = LEVEL_COLORS.get(display_level) if sink.use_color else None
        head = f"[{mod}] " if mod else ""
        line = f"{head}{col}{display_level}{RESET} {msg}" if col else f"{head}{display_level} {msg}"
        if not sink.show_time:
            return line
        ts = datetime.datetime.now().strftime(sink.time_fmt)
        return f"{DIM}[{ts}]{RESET} {line}" if sink.use_color else f"[{ts}] {line}"

    def _emit(self, severity: str, display_level: str, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        sev_no = LEVELS[severity]
        if self._sink.level_no > sev_no and not (severity == "debug" and _debug_enabled()):
            return
        msg = " ".join(str(p) for p in parts)
        record: Optional[Dict[str, Any]] = None
        if self._sink.json_stream is not None:
            record = {
                "ts": datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="milliseconds"),
                "level": display_level,
                "msg": msg,
                "ctx": dict(self._context),
            }
            if extra:
                record["extra"] = dict(extra)
        self._sink.write(self._fmt_text(display_level, msg), record)

    # Public API
    def debug(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("debug", "DEBUG", *parts, extra=extra)

    def info(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("info", "INFO", *parts, extra=extra)

    def warn(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("warn", "WARN", *parts, extra=extra)

    warning = warn

    def error(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("error", "ERROR", *parts, extra=extra)

    def success(self, *parts: Any, extra: Optional[Mapping[str, Any]] = None) -> None:
        self._emit("info", "SUCCESS", *parts, extra=extra)

    # log("text", level="WARN", module="STORE")
    def __call__(
        self,
        message: str,
        *,
        level: str = "INFO",
        module: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> None:
        target = self.bind(module=module) if module else self
        lvl = (level or "INFO").lower()
        fn = {
            "debug": target.debug,
            "warn": target.warn,
            "warning": target.warn,
            "error": target.error,
            "success": target.success,
        }.get(lvl, target.info)
        fn(message, extra=extra)

# default instance
log = Logger()

__all__ = ["Logger", "log", "LEVELS", "reset_debug_cache", "RESET", "DIM", "RED", "GREEN", "YELLOW", "BLUE"]
