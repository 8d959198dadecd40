# src/lane_board/board/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import replace
from datetime import datetime

from ..core.ports import Clock, ConfirmDelete, SeedSource, TaskPersistence
from .ids import next_id
from .task_models import AddDraft, EditDraft, Task, TaskStatus

logger = logging.getLogger(__name__)


def local_now_iso() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


class TaskStore:
    """
    In-memory owner of the task collection.

    Every successful mutation is written through to the persistence gateway
    immediately. Rejected mutations (blank title, unknown id, same-lane move,
    denied delete) change nothing and are not saved.

    Storage write errors propagate to the caller after the in-memory change
    has been applied.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        *,
        clock: Clock = local_now_iso,
        confirm_delete: ConfirmDelete | None = None,
    ) -> None:
        self._persistence = persistence
        self._clock = clock
        self._confirm_delete = confirm_delete
        self._tasks: list[Task] = []

    # ---- startup ----

    async def bootstrap(self, seed: SeedSource | None = None) -> str:
        """
        Populate the collection.

        Order: persisted collection, else seed data (if a source is given and
        it succeeds), else empty. Returns "storage", "seed" or "empty".
        """
        loaded = self._persistence.load()
        if loaded:
            self._tasks = loaded
            logger.info("TaskStore bootstrapped from storage tasks=%d", len(loaded))
            return "storage"

        if seed is None:
            self._tasks = []
            return "empty"

        result = await seed.load()
        return self.adopt_seed(result.tasks if result.ok else None)

    def adopt_seed(self, tasks: list[Task] | None) -> str:
        """Completion branch for the seed fetch: adopt on success, stay empty on failure."""
        if not tasks:
            self._tasks = []
            logger.info("TaskStore starting empty (no stored data, no seed).")
            return "empty"

        self._tasks = list(tasks)
        self._save()
        logger.info("TaskStore bootstrapped from seed tasks=%d", len(self._tasks))
        return "seed"

    # ---- read helpers ----

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def snapshot(self) -> list[Task]:
        return [replace(t) for t in self._tasks]

    def get(self, task_id: int) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # ---- mutations ----

    def add_task(self, draft: AddDraft) -> Task | None:
        if not draft.title.strip():
            logger.debug("add_task rejected: blank title")
            return None

        task = Task(
            id=next_id(self._tasks),
            title=draft.title,
            description=draft.description,
            priority=draft.priority,
            status=draft.status,
            due_date=draft.due_date,
            created_at=self._clock(),
        )
        self._tasks.append(task)
        logger.info("Task added id=%s status=%s", task.id, task.status.value)
        self._save()
        return task

    def edit_task(self, draft: EditDraft) -> Task | None:
        if not draft.title.strip():
            logger.debug("edit_task rejected: blank title id=%s", draft.original_id)
            return None

        for idx, t in enumerate(self._tasks):
            if t.id != draft.original_id:
                continue
            updated = Task(
                id=t.id,
                title=draft.title,
                description=draft.description,
                priority=draft.priority,
                status=draft.status,
                due_date=draft.due_date,
                created_at=t.created_at,
            )
            self._tasks[idx] = updated
            logger.info("Task edited id=%s", updated.id)
            self._save()
            return updated

        logger.debug("edit_task: id=%s not found", draft.original_id)
        return None

    def delete_task(self, task_id: int, confirm: ConfirmDelete | None = None) -> bool:
        task = self.get(task_id)
        if task is None:
            logger.debug("delete_task: id=%s not found", task_id)
            return False

        gate = confirm if confirm is not None else self._confirm_delete
        if gate is not None and not gate(task):
            logger.debug("delete_task: id=%s not confirmed", task_id)
            return False

        self._tasks = [t for t in self._tasks if t.id != task_id]
        logger.info("Task deleted id=%s", task_id)
        self._save()
        return True

    def move_task(self, task_id: int, new_status: TaskStatus) -> bool:
        task = self.get(task_id)
        if task is None:
            logger.debug("move_task: id=%s not found", task_id)
            return False
        if task.status == new_status:
            return False

        old = task.status
        task.status = new_status
        logger.info("Task %s moved %s -> %s", task_id, old.value, new_status.value)
        self._save()
        return True

    # ---- persistence ----

    def _save(self) -> None:
        self._persistence.save(self._tasks)
