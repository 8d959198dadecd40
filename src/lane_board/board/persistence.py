# src/lane_board/board/persistence.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..core.ports import KeyValueStore
from .ids import next_id
from .task_models import Priority, Task, TaskStatus

logger = logging.getLogger(__name__)

STORAGE_KEY = "tm_tasks_v1"


class SqliteKeyValueStore:
    """
    Local key-value store backed by a single SQLite table.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "board.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteKeyValueStore ready db=%s", self._db_path)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def get(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row[0])
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()


def _coerce_id(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def decode_tasks(records: Iterable[Any], *, origin: str = "storage") -> list[Task]:
    """
    Turn raw JSON records into Task objects.

    - non-object records and records without a usable title are skipped
    - unknown status/priority fall back to To-Do/Low
    - missing or duplicate ids get a freshly allocated id
    """
    out: list[Task] = []
    needs_id: list[tuple[Task, Any]] = []
    seen: set[int] = set()

    for idx, raw in enumerate(records):
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object task record #%s from %s", idx, origin)
            continue
        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            logger.warning("Skipping task record #%s from %s: missing title", idx, origin)
            continue

        task = Task(
            id=0,
            title=title,
            description=str(raw.get("description") or ""),
            priority=Priority.from_db(raw.get("priority")),
            status=TaskStatus.from_db(raw.get("status")),
            due_date=str(raw.get("dueDate") or ""),
            created_at=str(raw.get("createdAt") or ""),
        )

        tid = _coerce_id(raw.get("id"))
        if tid is None or tid in seen:
            needs_id.append((task, raw.get("id")))
        else:
            task.id = tid
            seen.add(tid)
        out.append(task)

    for task, raw_id in needs_id:
        task.id = next_id(out)
        logger.warning(
            "Task record from %s had unusable id=%r; assigned id=%s",
            origin,
            raw_id,
            task.id,
        )

    return out


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


class TaskGateway:
    """
    Durable load/save of the whole task collection under one namespaced key.

    load() never raises: a missing, unreadable or corrupt slot is "no data".
    save() lets storage errors propagate; callers have already applied the
    mutation in memory.
    """

    def __init__(self, kv: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._kv = kv
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Task]:
        try:
            raw = self._kv.get(self._key)
        except Exception:
            logger.warning("Failed to read storage slot %s", self._key, exc_info=True)
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except (TypeError, ValueError, RecursionError):
            logger.warning("Storage slot %s is not valid JSON; starting empty", self._key)
            return []

        if not isinstance(data, list):
            logger.warning("Storage slot %s is not a JSON array; starting empty", self._key)
            return []

        tasks = decode_tasks(data, origin=f"storage:{self._key}")
        logger.debug("Loaded %d tasks from %s", len(tasks), self._key)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        payload = encode_tasks(tasks)
        self._kv.set(self._key, payload)
        logger.debug("Saved task collection to %s (%d bytes)", self._key, len(payload))
