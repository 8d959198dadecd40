# src/lane_board/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the board core.

The core depends on Protocols instead of concrete implementations.
This keeps storage, seed sources and prompts swappable and makes testing easier.
"""

from typing import TYPE_CHECKING, Callable, Iterable, Protocol

if TYPE_CHECKING:
    from ..board.seed import SeedResult
    from ..board.task_models import Task


class KeyValueStore(Protocol):
    """Local persistent key-value store (string keys, string values)."""
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class TaskPersistence(Protocol):
    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...


class SeedSource(Protocol):
    """One-shot provider of the initial collection when storage is empty."""
    async def load(self) -> SeedResult: ...


ConfirmDelete = Callable[["Task"], bool]
# Synchronous yes/no gate asked before a task is removed.

Clock = Callable[[], str]
# Returns the ISO-8601 timestamp stamped into createdAt.
