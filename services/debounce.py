# services/debounce.py
# Watchboard - Debounced calls and latest-wins gating for search requests
# Copyright (c) 2025-2026 CrossWatch / Cenodude (https://github.com/cenodude/CrossWatch)
from __future__ import annotations

import threading
from typing import Any, Callable, Protocol


class _Timer(Protocol):
    daemon: bool

    def start(self) -> None: ...
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[..., Any], tuple[Any, ...]], _Timer]


def _thread_timer(delay: float, fn: Callable[..., Any], args: tuple[Any, ...]) -> _Timer:
    return threading.Timer(delay, fn, args=args)


class LatestGate:
    """Monotonic token counter; only the most recently issued token is current."""

    def __init__(self) -> None:
        self._seq = 0
        self._lock = threading.Lock()

    def begin(self) -> int:
        with self._lock:
            self._seq += 1
            return self._seq

    def is_latest(self, token: int) -> bool:
        with self._lock:
            return token == self._seq

    def invalidate(self) -> None:
        self.begin()


class Debouncer:
    """
    Run ``fn`` once the caller has been quiet for ``delay`` seconds.

    Each ``call`` cancels a still-waiting timer and schedules a new one with the
    latest arguments. A timer that was replaced or cancelled never runs ``fn``,
    even if it already woke up; work already inside ``fn`` is not interrupted.
    """

    def __init__(
        self,
        delay: float,
        fn: Callable[..., Any],
        *,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.delay = max(0.0, float(delay))
        self.fn = fn
        self._factory = timer_factory or _thread_timer
        self._timer: _Timer | None = None
        self._gen = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def call(self, *args: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._gen += 1
            timer = self._factory(self.delay, self._fire, (self._gen, *args))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._gen += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fire(self, gen: int, *args: Any) -> None:
        with self._lock:
            if gen != self._gen:
                return
            self._timer = None
        self.fn(*args)


class SessionGates:
    """Per-client LatestGate registry (keyed by an opaque session id)."""

    def __init__(self, max_sessions: int = 256) -> None:
        self.max_sessions = max_sessions
        self._gates: dict[str, LatestGate] = {}
        self._lock = threading.Lock()

    def gate(self, sid: str) -> LatestGate:
        with self._lock:
            g = self._gates.get(sid)
            if g is None:
                if len(self._gates) >= self.max_sessions:
                    self._gates.pop(next(iter(self._gates)))
                g = self._gates[sid] = LatestGate()
            return g


__all__ = ["Debouncer", "LatestGate", "SessionGates", "TimerFactory"]
