# tests/test_commands.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from lane_board.board.persistence import SqliteKeyValueStore, TaskGateway
from lane_board.board.task_models import Priority, TaskStatus
from lane_board.board.task_store import TaskStore
from lane_board.board.view import SortKey
from lane_board.cli.bootstrap import bootstrap_board, create_initial_state
from lane_board.cli.commands import CommandRegistry, registry
from lane_board.core.state import AppState

from .fakes import FakeConfirm, FakeKeyValueStore


def test_command_registry_routes_and_aliases(state: AppState) -> None:
    reg = CommandRegistry()
    called = []

    def h(state, args):
        called.append(args)
        return "ok"

    reg.register("a", h, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x y") == "ok"
    assert reg.handle(state, '/alpha "x y"') == "ok"
    assert called == [["x", "y"], ["x y"]]


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Could not parse" in (reg.handle(state, '/a "unterminated') or "")


def test_add_edit_move_via_commands(state: AppState) -> None:
    reply = registry.handle(state, '/add Buy milk priority=high due=2024-05-01 desc="two litres"')
    assert reply is not None and reply.startswith("Added #1")

    task = state.store.get(1)
    assert task is not None
    assert task.title == "Buy milk"
    assert task.priority == Priority.HIGH
    assert task.description == "two litres"

    assert "Title is required" in (registry.handle(state, "/add   ") or "")
    assert "Unknown priority" in (registry.handle(state, "/add x priority=urgent") or "")

    created = task.created_at
    registry.handle(state, '/edit 1 title="Buy oat milk" status=in-progress')
    edited = state.store.get(1)
    assert edited is not None
    assert edited.title == "Buy oat milk"
    assert edited.status == TaskStatus.IN_PROGRESS
    assert edited.created_at == created

    assert registry.handle(state, "/move 1 done") == "Moved #1 to Completed."
    assert registry.handle(state, "/move 1 done") == "Nothing to move."


def test_drag_command_uses_reconciler(state: AppState) -> None:
    registry.handle(state, "/add a")
    assert registry.handle(state, "/drag 1 todo todo") == "Drop ignored."
    assert registry.handle(state, "/drag 1 todo -") == "Drop ignored."
    assert registry.handle(state, "/drag 1 todo done") == "Moved #1 to Completed."
    assert state.store.get(1).status == TaskStatus.COMPLETED  # type: ignore[union-attr]


def test_delete_command_respects_prompt(settings) -> None:
    prompt = FakeConfirm(answer=False)
    state = AppState(
        settings=settings,
        store=TaskStore(TaskGateway(FakeKeyValueStore()), confirm_delete=prompt),
    )
    registry.handle(state, "/add a")
    assert registry.handle(state, "/delete 1") == "Delete cancelled."
    assert prompt.asked == [1]
    prompt.answer = True
    assert registry.handle(state, "/delete 1") == "Deleted #1."
    assert registry.handle(state, "/delete 1") == "Task #1 not found."


def test_filter_sort_and_board_rendering(state: AppState) -> None:
    registry.handle(state, "/add Buy milk")
    registry.handle(state, "/add Buy milk priority=high")
    registry.handle(state, "/add Call bank status=completed due=2024-05-01")

    board = registry.handle(state, "/board") or ""
    assert "#1 Buy milk (2)" in board
    assert "#3 Call bank\n" in board
    assert "Due: May 1, 2024" in board

    registry.handle(state, "/filter priority high")
    assert state.criteria.priority == Priority.HIGH
    board = registry.handle(state, "/board") or ""
    assert "#2 Buy milk\n" in board
    assert "#1 " not in board

    registry.handle(state, "/sort due")
    assert state.criteria.sort_by == SortKey.DUE_DATE
    registry.handle(state, "/filter clear")
    assert state.criteria.priority is None and state.criteria.status is None


def test_create_initial_state_uses_sqlite_and_persists(settings) -> None:
    state = create_initial_state(settings=settings)
    registry.handle(state, "/add persisted")

    again = create_initial_state(settings=settings)
    assert again.store.snapshot() == []  # not bootstrapped yet
    stored = TaskGateway(SqliteKeyValueStore(settings.storage_path)).load()
    assert [t.title for t in stored] == ["persisted"]


@pytest.mark.asyncio
async def test_bootstrap_board_uses_seed_when_storage_empty(settings, tmp_path: Path) -> None:
    seed_path = Path(settings.seed_source)
    seed_path.write_text(json.dumps([{"id": 1, "title": "seeded"}]), "utf-8")
    settings.seed_enabled = True

    state = create_initial_state(settings=settings, confirm_delete=FakeConfirm(answer=True))
    assert await bootstrap_board(state) == "seed"
    assert [t.title for t in state.store] == ["seeded"]

    # Second start reads storage, the seed file is no longer consulted.
    seed_path.unlink()
    state2 = create_initial_state(settings=settings)
    assert await bootstrap_board(state2) == "storage"
    assert [t.title for t in state2.store] == ["seeded"]
