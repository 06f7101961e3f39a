# Watchboard test scripts
from __future__ import annotations

import io
import json
from pathlib import Path

from _logging import Logger
from wb_platform import config_base as cb


def test_defaults_when_no_file(config_base: Path) -> None:
    cfg = cb.load_config()
    assert cfg["storage"]["key"] == "watchlist"
    assert cfg["items"]["default_category"] == "planning"
    assert cb.storage_path(cfg) == config_base / "watchlist.json"


def test_user_values_merge_over_defaults(config_base: Path) -> None:
    (config_base / "config.json").write_text(
        json.dumps({"storage": {"key": "my/list"}, "search": {"min_query_length": "2", "timeout": "x"}}),
        encoding="utf-8",
    )
    cfg = cb.load_config()
    assert cfg["search"]["min_query_length"] == 2
    assert cfg["search"]["timeout"] == 10
    assert cfg["search"]["debounce_ms"] == 300
    assert cb.storage_path(cfg).name == "my_list.json"


def test_corrupt_config_falls_back_to_defaults(config_base: Path) -> None:
    (config_base / "config.json").write_text("{oops", encoding="utf-8")
    assert cb.load_config()["ui"]["port"] == 8790


def test_merge_config_persists(config_base: Path) -> None:
    cfg = cb.merge_config({"runtime": {"debug": True}})
    assert cfg["runtime"] == {"debug": True, "debug_http": False, "log_file": ""}
    assert json.loads((config_base / "config.json").read_text(encoding="utf-8"))["runtime"]["debug"] is True


def test_write_json_atomic(tmp_path: Path) -> None:
    p = tmp_path / "nested" / "data.json"
    cb.write_json_atomic(p, [{"a": 1}])
    assert p.read_text(encoding="utf-8").endswith("]\n")
    assert json.loads(p.read_text(encoding="utf-8")) == [{"a": 1}]
    assert [x.name for x in p.parent.iterdir()] == ["data.json"]


def test_logger_module_prefix(config_base: Path) -> None:
    buf = io.StringIO()
    log = Logger(stream=buf, use_color=False, show_time=False).child("STORE")
    log.info("loaded", 3, "items")
    log.debug("hidden")
    log("careful", level="warn", module="BOARD")

    lines = buf.getvalue().splitlines()
    assert lines == ["[STORE] INFO loaded 3 items", "[BOARD] WARN careful"]


def test_logger_configure_is_shared_with_children(config_base: Path) -> None:
    buf = io.StringIO()
    root = Logger(stream=buf, use_color=False, show_time=False)
    store_log = root.child("STORE")
    log_file = config_base / "watchboard.log"

    root.configure({"runtime": {"debug": True, "log_file": str(log_file)}})
    store_log.debug("now visible", extra={"n": 1})

    assert buf.getvalue().splitlines() == ["[STORE] DEBUG now visible"]
    record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
    assert record["level"] == "DEBUG"
    assert record["msg"] == "now visible"
    assert record["ctx"] == {"module": "STORE"}
    assert record["extra"] == {"n": 1}
    root._sink.json_stream.close()
