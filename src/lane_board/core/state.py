# src/lane_board/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..board.task_store import TaskStore
from ..board.view import BoardView, ViewCriteria, project


@dataclass
class AppState:
    """
    Everything a connector needs: settings, the task store and the current
    view criteria. Built once by cli.bootstrap and passed around explicitly.
    """

    settings: Any
    store: TaskStore
    criteria: ViewCriteria = field(default_factory=ViewCriteria)

    def board(self) -> BoardView:
        return project(self.store, self.criteria)
