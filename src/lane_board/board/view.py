# src/lane_board/board/view.py

from __future__ import annotations

"""
Board view projection.

project() is a pure function of the task collection and the view criteria:
filter -> sort -> partition into lanes -> per-lane duplicate-title counts.
Nothing here is cached or stored; recompute whenever the board is shown.
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from .task_models import LANES, Priority, Task, TaskStatus


class SortKey(StrEnum):
    CREATED_AT = "createdAt"
    DUE_DATE = "dueDate"


@dataclass(frozen=True, slots=True)
class ViewCriteria:
    priority: Priority | None = None
    status: TaskStatus | None = None
    sort_by: SortKey = SortKey.CREATED_AT


@dataclass(frozen=True, slots=True)
class CardView:
    task: Task
    duplicate_count: int

    @property
    def is_duplicate(self) -> bool:
        return self.duplicate_count > 1


@dataclass(frozen=True, slots=True)
class BoardView:
    criteria: ViewCriteria
    lanes: Mapping[TaskStatus, tuple[CardView, ...]]

    def lane(self, status: TaskStatus) -> tuple[CardView, ...]:
        return self.lanes[status]

    def tasks(self) -> list[Task]:
        return [card.task for status in LANES for card in self.lanes[status]]


def parse_when(raw: str | None) -> datetime | None:
    """
    Parse a date or ISO-8601 timestamp. Naive values are read as local time.
    Returns None for empty or unparseable input.
    """
    if not raw or not raw.strip():
        return None
    try:
        dt = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    if dt.tzinfo is not None:
        return dt
    try:
        return dt.astimezone()
    except (OverflowError, OSError, ValueError):
        return None


def format_day(raw: str | None) -> str:
    """Render as 'May 1, 2024'; '-' when missing or unparseable."""
    dt = parse_when(raw)
    if dt is None:
        return "-"
    return f"{dt:%b} {dt.day}, {dt.year}"


def _sort_key(task: Task, sort_by: SortKey) -> tuple[int, float]:
    raw = task.due_date if sort_by == SortKey.DUE_DATE else task.created_at
    dt = parse_when(raw)
    # Unparseable dates go after every real date.
    if dt is None:
        return (1, 0.0)
    return (0, dt.timestamp())


def filter_tasks(tasks: Iterable[Task], criteria: ViewCriteria) -> list[Task]:
    return [
        t
        for t in tasks
        if (criteria.priority is None or t.priority == criteria.priority)
        and (criteria.status is None or t.status == criteria.status)
    ]


def sort_tasks(tasks: Iterable[Task], sort_by: SortKey) -> list[Task]:
    # sorted() is stable: equal keys keep their input order.
    return sorted(tasks, key=lambda t: _sort_key(t, sort_by))


def project(tasks: Iterable[Task], criteria: ViewCriteria | None = None) -> BoardView:
    criteria = criteria or ViewCriteria()
    ordered = sort_tasks(filter_tasks(tasks, criteria), criteria.sort_by)

    by_lane: dict[TaskStatus, list[Task]] = {status: [] for status in LANES}
    for t in ordered:
        by_lane[t.status].append(t)

    lanes: dict[TaskStatus, tuple[CardView, ...]] = {}
    for status, lane_tasks in by_lane.items():
        titles = Counter(t.title for t in lane_tasks)
        lanes[status] = tuple(CardView(task=t, duplicate_count=titles[t.title]) for t in lane_tasks)

    return BoardView(criteria=criteria, lanes=lanes)
