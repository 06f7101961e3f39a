# Watchboard test scripts
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture()
def config_base(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    from wb_platform import config_base as cb
    import _logging

    monkeypatch.setenv("CONFIG_BASE", str(tmp_path))
    monkeypatch.setattr(cb, "CONFIG", tmp_path)
    _logging.reset_debug_cache()
    return tmp_path


@pytest.fixture()
def store(tmp_path: Path):
    from services.store import ItemStore

    s = ItemStore(tmp_path / "watchlist.json")
    s.load()
    return s


class FakeTimer:
    def __init__(self, delay: float, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self.delay = delay
        self.fn = fn
        self.args = args
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.fn(*self.args)


class TimerRecorder:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, fn: Callable[..., Any], args: tuple[Any, ...]) -> FakeTimer:
        t = FakeTimer(delay, fn, args)
        self.timers.append(t)
        return t

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


@pytest.fixture()
def timers() -> TimerRecorder:
    return TimerRecorder()


class FakeSearcher:
    def __init__(self, results: list[dict[str, Any]] | None = None, min_length: int = 3) -> None:
        self.results = results if results is not None else [
            {"title": "Inception", "poster": "https://img/inception.jpg", "type": "movie", "year": "2010"},
        ]
        self.min_length = min_length
        self.queries: list[str] = []
        self.before_return: Callable[[str], None] | None = None

    def min_query_length(self) -> int:
        return self.min_length

    def search(self, query: str) -> list[dict[str, Any]]:
        self.queries.append(query)
        if self.before_return is not None:
            self.before_return(query)
        return list(self.results)


@pytest.fixture()
def searcher() -> FakeSearcher:
    return FakeSearcher()
