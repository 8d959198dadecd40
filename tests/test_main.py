# tests/test_main.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from lane_board.cli import main as main_mod
from lane_board.core.state import AppState
from lane_board.logging_setup import BoardConsoleFilter, setup_logging

from .conftest import make_task
from .fakes import FakeKeyValueStore


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_passes_board_records_and_quiets_others() -> None:
    f = BoardConsoleFilter()
    assert f.filter(_record("lane_board.board.task_store", logging.DEBUG))
    assert f.filter(_record("lane_board", logging.INFO))
    assert not f.filter(_record("lane_boardish", logging.INFO))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("httpx", logging.INFO))
    assert f.filter(_record("httpx", logging.ERROR))


def test_setup_logging_writes_file_and_quiets_http_clients(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("lane_board.test").debug("hello file")
        for h in root.handlers:
            h.flush()

        assert log_file == tmp_path / "logs" / "lane_board.log"
        assert "hello file" in log_file.read_text("utf-8")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)


def test_main_reaches_console_when_bootstrap_save_fails(
    monkeypatch: pytest.MonkeyPatch,
    settings: SimpleNamespace,
    state: AppState,
    kv: FakeKeyValueStore,
    caplog: pytest.LogCaptureFixture,
) -> None:
    seen: list[AppState] = []

    async def failing_bootstrap(st: AppState) -> str:
        kv.fail_set = True
        return st.store.adopt_seed([make_task(1, "seeded")])

    monkeypatch.setattr(main_mod, "get_settings", lambda: settings)
    monkeypatch.setattr(main_mod, "setup_logging", lambda **kw: None)
    monkeypatch.setattr(main_mod, "create_initial_state", lambda **kw: state)
    monkeypatch.setattr(main_mod, "bootstrap_board", failing_bootstrap)
    monkeypatch.setattr(main_mod, "run_console_loop", seen.append)

    with caplog.at_level(logging.ERROR, logger="lane_board.cli.main"):
        main_mod.main()

    assert seen == [state]
    assert "Board bootstrap failed" in caplog.text
