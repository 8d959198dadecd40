# src/lane_board/board/ids.py

from __future__ import annotations

from collections.abc import Iterable

from .task_models import Task


def next_id(existing: Iterable[Task]) -> int:
    """
    Allocate an id that no task in `existing` uses.

    Computed from the collection itself (max + 1), so ids stay unique across
    reloads without a process-local counter.
    """
    return max((t.id for t in existing), default=0) + 1
