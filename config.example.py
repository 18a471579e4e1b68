# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Keep local values in .env (gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "KANBAN_APP_NAME": "App display name (default: kanban).",
    "KANBAN_LOG_LEVEL": "Console logging level (default: WARNING).",
    "KANBAN_LOG_TO_FILE": "Write full logs to <data_dir>/kanban.log (true/false, default: true).",
    # Auth endpoint
    "KANBAN_AUTH_BASE_URL": "Login endpoint host; requests go to <url>/login (default: https://apis.ccbp.in).",
    "KANBAN_HTTP_TIMEOUT_SECONDS": "Login request timeout in seconds (default: 10).",
    # Paths (gitignored)
    "KANBAN_DATA_DIR": "Local data directory (default: .local/kanban).",
    "KANBAN_STORAGE_DIR": "Storage slots directory (default: <data_dir>/storage).",
    "KANBAN_TASKS_SLOT": "Slot holding the task collection (default: dashboard_tasks).",
    "KANBAN_TOKEN_SLOT": "Slot holding the session token (default: jwt_token).",
    # Board
    "KANBAN_DEFAULT_STATUS": "Column for new tasks: todo | progress | done (default: progress).",
}
