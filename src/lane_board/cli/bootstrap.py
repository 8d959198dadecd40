# src/lane_board/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite key-value store, gateway and TaskStore into AppState,
- runs the one-time bootstrap (storage, else seed, else empty).
"""

from __future__ import annotations

import logging

from ..board.persistence import SqliteKeyValueStore, TaskGateway
from ..board.seed import SeedLoader
from ..board.task_store import TaskStore
from ..config import get_settings
from ..core.ports import ConfirmDelete
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    confirm_delete: ConfirmDelete | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    gateway = TaskGateway(SqliteKeyValueStore(settings.storage_path), key=settings.storage_key)
    store = TaskStore(gateway, confirm_delete=confirm_delete)
    return AppState(settings=settings, store=store)


async def bootstrap_board(state: AppState) -> str:
    """Load the board; falls back to seed data only when storage is empty."""
    seed = SeedLoader(state.settings.seed_source) if state.settings.seed_enabled else None
    origin = await state.store.bootstrap(seed)
    logger.info("Board ready origin=%s tasks=%d", origin, len(state.store))
    return origin
