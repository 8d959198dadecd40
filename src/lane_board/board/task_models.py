# src/lane_board/board/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Board lane a task belongs to.

    Values are the lane ids used by the drag layer and the stored JSON.
    """

    TODO = "To-Do"
    IN_PROGRESS = "In-Progress"
    COMPLETED = "Completed"

    @classmethod
    def from_db(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.TODO
        try:
            return cls(raw)
        except Exception:
            return cls.TODO

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus | None:
        """Lenient lookup for user input ("todo", "in-progress", "done", ...)."""
        if not raw:
            return None
        key = raw.strip().lower().replace("_", "-").replace(" ", "-")
        return _STATUS_ALIASES.get(key)


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_db(cls, raw: Any) -> Priority:
        if not raw:
            return cls.LOW
        try:
            return cls(raw)
        except Exception:
            return cls.LOW

    @classmethod
    def parse(cls, raw: str | None) -> Priority | None:
        if not raw:
            return None
        key = raw.strip().lower()
        for p in cls:
            if p.value.lower() == key or p.name.lower() == key:
                return p
        return None


LANES: tuple[TaskStatus, ...] = (
    TaskStatus.TODO,
    TaskStatus.IN_PROGRESS,
    TaskStatus.COMPLETED,
)

_STATUS_ALIASES: dict[str, TaskStatus] = {
    "to-do": TaskStatus.TODO,
    "todo": TaskStatus.TODO,
    "in-progress": TaskStatus.IN_PROGRESS,
    "inprogress": TaskStatus.IN_PROGRESS,
    "doing": TaskStatus.IN_PROGRESS,
    "completed": TaskStatus.COMPLETED,
    "done": TaskStatus.COMPLETED,
}


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str
    priority: Priority
    status: TaskStatus
    due_date: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "status": self.status.value,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True, slots=True)
class AddDraft:
    """Form contents for a new task. id and createdAt are assigned by the store."""

    title: str
    description: str = ""
    priority: Priority = Priority.LOW
    status: TaskStatus = TaskStatus.TODO
    due_date: str = ""


@dataclass(frozen=True, slots=True)
class EditDraft:
    """
    Form contents for an existing task.

    original_id picks the task to edit. original_created_at records what the
    form was opened with; the store keeps the stored id and createdAt regardless.
    """

    original_id: int
    original_created_at: str
    title: str
    description: str = ""
    priority: Priority = Priority.LOW
    status: TaskStatus = TaskStatus.TODO
    due_date: str = ""

    @classmethod
    def from_task(cls, task: Task, **changes: Any) -> EditDraft:
        fields = {
            "title": task.title,
            "description": task.description,
            "priority": task.priority,
            "status": task.status,
            "due_date": task.due_date,
        }
        fields.update(changes)
        return cls(original_id=task.id, original_created_at=task.created_at, **fields)


TaskDraft = AddDraft | EditDraft
