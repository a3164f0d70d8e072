# src/glass_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is read at import time except the .env file.
- Bad values fall back to defaults instead of crashing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "GLASS_TODO"

STORAGE_BACKENDS = ("json", "sqlite", "memory")
PRIORITIES = ("low", "medium", "high")
FILTERS = ("all", "active", "completed")
SORTS = ("newest", "oldest", "priority", "alphabetical")


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


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    log_dir: Path

    # ---- Persistence ----
    storage_backend: str
    storage_path: Path
    storage_key: str

    # ---- UI defaults ----
    default_priority: str
    default_filter: str
    default_sort: str

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "glass-todo").strip() or "glass-todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/glass_todo"))
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        storage_backend = _env_choice(_k("STORAGE_BACKEND"), STORAGE_BACKENDS, "json")
        default_file = "tasks.sqlite3" if storage_backend == "sqlite" else "tasks.json"
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / default_file)
        storage_key = _env(_k("STORAGE_KEY"), "glassmorphic-todo-tasks").strip() or "glassmorphic-todo-tasks"

        default_priority = _env_choice(_k("DEFAULT_PRIORITY"), PRIORITIES, "medium")
        default_filter = _env_choice(_k("DEFAULT_FILTER"), FILTERS, "all")
        default_sort = _env_choice(_k("DEFAULT_SORT"), SORTS, "newest")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            log_dir=log_dir,
            storage_backend=storage_backend,
            storage_path=storage_path,
            storage_key=storage_key,
            default_priority=default_priority,
            default_filter=default_filter,
            default_sort=default_sort,
        )


_SETTINGS: Settings | None = None


def get_settings(*, reload: bool = False) -> Settings:
    """Build settings once per process (loads .env on first call)."""
    global _SETTINGS
    if _SETTINGS is None or reload:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
