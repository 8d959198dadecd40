# src/lane_board/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Board core never reads settings; the composition root injects values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .board.persistence import STORAGE_KEY
from .board.seed import BUNDLED_SEED_PATH

ENV_PREFIX = "LANEBOARD"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path
    storage_key: str

    # ---- Seed data ----
    seed_enabled: bool
    seed_source: str

    # ---- Console ----
    confirm_delete: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "lane-board").strip() or "lane-board"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/lane_board"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "board.sqlite3")
        storage_key = _env(_k("STORAGE_KEY"), STORAGE_KEY).strip() or STORAGE_KEY

        seed_enabled = _env_bool(_k("SEED_ENABLED"), True)
        seed_source = _env(_k("SEED_SOURCE"), str(BUNDLED_SEED_PATH)).strip() or str(
            BUNDLED_SEED_PATH
        )

        confirm_delete = _env_bool(_k("CONFIRM_DELETE"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_key=storage_key,
            seed_enabled=seed_enabled,
            seed_source=seed_source,
            confirm_delete=confirm_delete,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
