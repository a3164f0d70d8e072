# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "GLASS_TODO_APP_NAME": "App display name (default: glass-todo).",
    "GLASS_TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "GLASS_TODO_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
    # Paths (gitignored)
    "GLASS_TODO_DATA_DIR": "Local data directory (default: .local/glass_todo).",
    "GLASS_TODO_LOG_DIR": "Where glass_todo.log is written (default: <data_dir>).",
    # Persistence
    "GLASS_TODO_STORAGE_BACKEND": "json | sqlite | memory (default: json).",
    "GLASS_TODO_STORAGE_PATH": (
        "Storage file (default: <data_dir>/tasks.json, or <data_dir>/tasks.sqlite3 for sqlite)."
    ),
    "GLASS_TODO_STORAGE_KEY": (
        "Key the task blob is stored under (default: glassmorphic-todo-tasks; "
        "the minimal variant used: tasks)."
    ),
    # UI defaults
    "GLASS_TODO_DEFAULT_PRIORITY": "low | medium | high (default: medium).",
    "GLASS_TODO_DEFAULT_FILTER": "all | active | completed (default: all).",
    "GLASS_TODO_DEFAULT_SORT": "newest | oldest | priority | alphabetical (default: newest).",
}
