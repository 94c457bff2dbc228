# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use .env (local, gitignored) to override any of these.

This file exists to make the repo self-documenting even without opening src/tasklist/config.py.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Storage
    "TASKLIST_STORAGE_BACKEND": "Where tasks are kept: sqlite | json (default: sqlite).",
    "TASKLIST_STORAGE_KEY": "Key the whole task list is stored under (default: tasks).",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data directory, also holds tasklist.log (default: .local/tasklist).",
    "TASKLIST_DB_PATH": "SQLite path for the sqlite backend (default: <data_dir>/tasks.sqlite3).",
    "TASKLIST_JSON_DIR": "Directory for the json backend (default: <data_dir>/store).",
    # Startup
    "TASKLIST_SEED_SAMPLE_TASKS": (
        "Show a few demo tasks on first start, when nothing is stored yet (true/false)."
    ),
}
