# src/lane_board/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import replace

from ..board.drag import DragOutcome, apply_drag
from ..board.task_models import LANES, AddDraft, EditDraft, Priority, TaskStatus
from ..board.view import BoardView, SortKey, format_day
from ..core.state import AppState

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

_FIELD_ALIASES = {
    "title": "title",
    "desc": "description",
    "description": "description",
    "priority": "priority",
    "prio": "priority",
    "status": "status",
    "lane": "status",
    "due": "due_date",
    "duedate": "due_date",
}


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)
        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def render_board(view: BoardView) -> str:
    crit = view.criteria
    header = (
        f"Filter: priority={crit.priority.value if crit.priority else 'all'} "
        f"status={crit.status.value if crit.status else 'all'} | "
        f"Sort: {'Closest Due Date' if crit.sort_by == SortKey.DUE_DATE else 'Oldest First'}"
    )
    lines = [header]
    for status in LANES:
        cards = view.lane(status)
        lines.append("")
        lines.append(f"== {status.value} ({len(cards)}) ==")
        if not cards:
            lines.append("  (empty)")
            continue
        for card in cards:
            t = card.task
            dup = f" ({card.duplicate_count})" if card.is_duplicate else ""
            lines.append(f"  #{t.id} {t.title}{dup}")
            lines.append(f"      Priority: {t.priority.value} | Due: {format_day(t.due_date)}")
    return "\n".join(lines)


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw.lstrip("#"))
    except ValueError:
        return None


def _parse_fields(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """Split args into free words and key=value pairs (keys normalized)."""
    words: list[str] = []
    fields: dict[str, str] = {}
    for a in args:
        key, sep, value = a.partition("=")
        norm = _FIELD_ALIASES.get(key.strip().lower()) if sep else None
        if norm is None:
            words.append(a)
        else:
            fields[norm] = value
    return words, fields


def _typed_fields(fields: dict[str, str]) -> tuple[dict[str, object], str | None]:
    out: dict[str, object] = {}
    for key, value in fields.items():
        if key == "priority":
            prio = Priority.parse(value)
            if prio is None:
                return {}, f"Unknown priority: {value}. Use Low, Medium or High."
            out[key] = prio
        elif key == "status":
            status = TaskStatus.parse(value)
            if status is None:
                return {}, f"Unknown lane: {value}. Use To-Do, In-Progress or Completed."
            out[key] = status
        else:
            out[key] = value
    return out, None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_board(state: AppState, args: list[str]) -> str:
    return render_board(state.board())


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Buy milk priority=High due=2024-05-01 desc="two litres"
    """
    words, fields = _parse_fields(args)
    typed, err = _typed_fields(fields)
    if err:
        return err
    if "title" not in typed:
        typed["title"] = " ".join(words)

    draft = AddDraft(**typed)  # type: ignore[arg-type]
    task = state.store.add_task(draft)
    if task is None:
        return "Title is required."
    return f"Added #{task.id} {task.title} [{task.status.value}]."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> title=... desc=... priority=... status=... due=...
    """
    if not args:
        return "Usage: /edit <id> field=value ..."
    task_id = _parse_id(args[0])
    if task_id is None:
        return f"Invalid task id: {args[0]}"
    task = state.store.get(task_id)
    if task is None:
        return f"Task #{task_id} not found."

    words, fields = _parse_fields(args[1:])
    if words:
        return f"Unrecognized arguments: {' '.join(words)}. Use field=value."
    typed, err = _typed_fields(fields)
    if err:
        return err

    updated = state.store.edit_task(EditDraft.from_task(task, **typed))
    if updated is None:
        return "Title is required."
    return f"Updated #{updated.id} {updated.title}."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <id>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return f"Invalid task id: {args[0]}"
    if state.store.get(task_id) is None:
        return f"Task #{task_id} not found."
    if state.store.delete_task(task_id):
        return f"Deleted #{task_id}."
    return "Delete cancelled."


def cmd_move(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /move <id> <lane>"
    task_id = _parse_id(args[0])
    status = TaskStatus.parse(" ".join(args[1:]))
    if task_id is None or status is None:
        return "Usage: /move <id> <To-Do|In-Progress|Completed>"
    if state.store.move_task(task_id, status):
        return f"Moved #{task_id} to {status.value}."
    return "Nothing to move."


def cmd_drag(state: AppState, args: list[str]) -> str:
    """
    /drag <id> <from-lane> <to-lane | ->   ("-" means dropped outside any lane)
    """
    if len(args) != 3:
        return "Usage: /drag <id> <from-lane> <to-lane|->"
    source = TaskStatus.parse(args[1])
    if source is None:
        return f"Unknown lane: {args[1]}"
    destination: TaskStatus | None = None
    if args[2] != "-":
        destination = TaskStatus.parse(args[2])
        if destination is None:
            return f"Unknown lane: {args[2]}"

    outcome = DragOutcome(
        source_lane=source.value,
        destination_lane=destination.value if destination else None,
        dragged_id=args[0].lstrip("#"),
    )
    if apply_drag(state.store, outcome):
        return f"Moved #{outcome.dragged_id} to {outcome.destination_lane}."
    return "Drop ignored."


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter priority <Low|Medium|High|all>
    /filter status <lane|all>
    /filter clear
    """
    if not args:
        return "Usage: /filter priority <value|all> | /filter status <value|all> | /filter clear"

    sub = args[0].lower()
    value = " ".join(args[1:]).strip()

    if sub == "clear":
        state.criteria = replace(state.criteria, priority=None, status=None)
        return "Filters cleared."

    if sub in ("priority", "prio"):
        if not value or value.lower() == "all":
            state.criteria = replace(state.criteria, priority=None)
            return "Showing all priorities."
        prio = Priority.parse(value)
        if prio is None:
            return f"Unknown priority: {value}"
        state.criteria = replace(state.criteria, priority=prio)
        return f"Showing priority {prio.value}."

    if sub in ("status", "lane"):
        if not value or value.lower() == "all":
            state.criteria = replace(state.criteria, status=None)
            return "Showing all statuses."
        status = TaskStatus.parse(value)
        if status is None:
            return f"Unknown lane: {value}"
        state.criteria = replace(state.criteria, status=status)
        return f"Showing status {status.value}."

    return "Usage: /filter priority <value|all> | /filter status <value|all> | /filter clear"


def cmd_sort(state: AppState, args: list[str]) -> str:
    arg = args[0].lower() if args else ""
    if arg in ("created", "createdat", "oldest"):
        state.criteria = replace(state.criteria, sort_by=SortKey.CREATED_AT)
        return "Sorting by creation time (oldest first)."
    if arg in ("due", "duedate"):
        state.criteria = replace(state.criteria, sort_by=SortKey.DUE_DATE)
        return "Sorting by due date (closest first)."
    return "Usage: /sort created | /sort due"


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /show <id>"
    task_id = _parse_id(args[0])
    task = state.store.get(task_id) if task_id is not None else None
    if task is None:
        return f"Task {args[0]} not found."
    return (
        f"#{task.id} {task.title}\n"
        f"  Lane: {task.status.value}\n"
        f"  Priority: {task.priority.value}\n"
        f"  Due: {format_day(task.due_date)}\n"
        f"  Created: {task.created_at or '-'}\n"
        f"  {task.description}"
    ).rstrip()


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("board", cmd_board, help_text="Show the board.", aliases=["b", "ls"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <title> [priority=.. status=.. due=.. desc=..]."
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> field=value ...")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("move", cmd_move, help_text="Move a task: /move <id> <lane>.", aliases=["mv"])
registry.register("drag", cmd_drag, help_text="Drag a card: /drag <id> <from> <to|->.")
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter priority|status <value|all> | clear."
)
registry.register("sort", cmd_sort, help_text="Sort: /sort created | /sort due.")
registry.register("show", cmd_show, help_text="Show task details: /show <id>.")
