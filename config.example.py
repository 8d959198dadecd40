# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "LANEBOARD_APP_NAME": "App display name (default: lane-board).",
    "LANEBOARD_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "LANEBOARD_DATA_DIR": "Local data directory (default: .local/lane_board).",
    "LANEBOARD_STORAGE_PATH": "SQLite key-value store path (default: <data_dir>/board.sqlite3).",
    "LANEBOARD_STORAGE_KEY": "Namespace key of the task collection (default: tm_tasks_v1).",
    # Seed data
    "LANEBOARD_SEED_ENABLED": "Load seed tasks when storage is empty (true/false, default: true).",
    "LANEBOARD_SEED_SOURCE": "Seed JSON: http(s) URL or file path (default: bundled data/tasks.json).",
    # Console
    "LANEBOARD_CONFIRM_DELETE": "Ask y/N before deleting a task (true/false, default: true).",
}
