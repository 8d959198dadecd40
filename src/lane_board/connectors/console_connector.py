# src/lane_board/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..board.task_models import Task
from ..cli.commands import cmd_add
from ..cli.commands import registry as command_registry
from ..cli.commands import render_board
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def console_confirm(task: Task) -> bool:
    """Ask on stdin before a delete. Anything but y/yes is a no."""
    try:
        answer = input(f"Are you sure you want to delete #{task.id} {task.title!r}? [y/N] ")
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer.strip().lower() in ("y", "yes")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.store))
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")
    print(render_board(state.board()))

    while True:
        try:
            user_input = input("\n>>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            if user_input.startswith("/"):
                response = command_registry.handle(state, user_input)
            else:
                # Bare text is a quick add, taken verbatim as the title.
                response = cmd_add(state, [user_input])
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command (the board may not be saved)."

        if response is not None:
            print(response)

    logger.info("Console connector finished.")
