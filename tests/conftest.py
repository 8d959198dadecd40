# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from lane_board.board.persistence import TaskGateway
from lane_board.board.task_models import Priority, Task, TaskStatus
from lane_board.board.task_store import TaskStore
from lane_board.core.state import AppState

from .fakes import FakeKeyValueStore, FixedClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and cli.bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="lane-board-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_path=tmp_path / "board.sqlite3",
        storage_key="tm_tasks_v1",
        seed_enabled=False,
        seed_source=str(tmp_path / "seed.json"),
        confirm_delete=False,
    )


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def store(kv: FakeKeyValueStore) -> TaskStore:
    return TaskStore(TaskGateway(kv), clock=FixedClock())


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, store=store)


def make_task(
    id: int,
    title: str = "task",
    *,
    status: TaskStatus = TaskStatus.TODO,
    priority: Priority = Priority.LOW,
    due_date: str = "",
    created_at: str = "2024-01-01T00:00:00+00:00",
    description: str = "",
) -> Task:
    return Task(
        id=id,
        title=title,
        description=description,
        priority=priority,
        status=status,
        due_date=due_date,
        created_at=created_at,
    )
