# src/lane_board/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, bootstraps the board (storage or seed)
and runs the console REPL in the main thread.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import bootstrap_board, create_initial_state
from ..config import get_settings
from ..connectors.console_connector import console_confirm, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(
        settings=settings,
        confirm_delete=console_confirm if settings.confirm_delete else None,
    )
    try:
        asyncio.run(bootstrap_board(state))
    except Exception:
        logger.exception("Board bootstrap failed; continuing with in-memory board.")

    try:
        run_console_loop(state)
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
