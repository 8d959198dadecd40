# src/lane_board/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER = "lane_board"

# HTTP client chatter from the seed fetch.
_QUIET_LIBRARIES: tuple[str, ...] = ("httpx", "httpcore")

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _is_app_record(name: str) -> bool:
    return name == APP_LOGGER or name.startswith(APP_LOGGER + ".")


class BoardConsoleFilter(logging.Filter):
    """
    Console filter for the REPL.

    Board records pass at the handler level. Everything else (captured
    warnings, sqlite/asyncio/http libraries) reaches the console only at
    ERROR and above; the log file still gets all of it.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if _is_app_record(record.name):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/lane_board",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route board logs to stderr (filtered) and to `<log_dir>/lane_board.log`.

    Returns the log file path. Safe to call again: existing root handlers
    are replaced.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "lane_board.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(BoardConsoleFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # httpx logs every request at INFO.
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    return log_file
