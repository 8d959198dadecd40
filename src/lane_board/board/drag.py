# src/lane_board/board/drag.py

from __future__ import annotations

"""
Drag-and-drop reconciliation.

The gesture layer reports where a card came from and where it was dropped.
Only cross-lane drops become a status change; order inside a lane is always
derived by the view, so same-lane drops are ignored.
"""

import logging
from dataclasses import dataclass
from typing import Any

from .task_models import TaskStatus
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def _lane_id(end: Any) -> str | None:
    if isinstance(end, dict):
        end = end.get("laneId")
    if isinstance(end, str) and end:
        return end
    return None


@dataclass(frozen=True, slots=True)
class DragOutcome:
    source_lane: str
    destination_lane: str | None
    dragged_id: int | str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> DragOutcome:
        """
        Parse {"source": {"laneId"}, "destination": {"laneId"} | None, "draggedId"}.

        Either end may also be a bare lane id string.
        """
        return cls(
            source_lane=_lane_id(raw.get("source")) or "",
            destination_lane=_lane_id(raw.get("destination")),
            dragged_id=raw.get("draggedId", ""),
        )


@dataclass(frozen=True, slots=True)
class MoveRequest:
    task_id: int
    new_status: TaskStatus


def _coerce_task_id(raw: int | str) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def reconcile(outcome: DragOutcome) -> MoveRequest | None:
    if outcome.destination_lane is None:
        return None
    if outcome.source_lane == outcome.destination_lane:
        return None

    try:
        new_status = TaskStatus(outcome.destination_lane)
    except ValueError:
        logger.warning("Drop on unknown lane %r ignored", outcome.destination_lane)
        return None

    task_id = _coerce_task_id(outcome.dragged_id)
    if task_id is None:
        logger.warning("Drag with unusable task id %r ignored", outcome.dragged_id)
        return None

    return MoveRequest(task_id=task_id, new_status=new_status)


def apply_drag(store: TaskStore, outcome: DragOutcome) -> bool:
    """Reconcile `outcome` and apply the resulting move. True if a task changed lane."""
    request = reconcile(outcome)
    if request is None:
        return False
    return store.move_task(request.task_id, request.new_status)
