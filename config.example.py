# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: WARNING); the log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data directory for the database and log (default: .local/tasklist).",
    "TASKLIST_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    # Behaviour
    "TASKLIST_CASE_SENSITIVE_SEARCH": "Match /search text case-sensitively (default: false).",
    "TASKLIST_VALIDATE_DESCRIPTIONS": "Reject blank task text in the coordinator too (default: true).",
    "TASKLIST_SHOW_TIMESTAMPS": "Prefix console replies with a local timestamp (default: true).",
}
