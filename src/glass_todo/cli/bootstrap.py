# src/glass_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires storage -> persistence -> TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage import create_storage
from ..tasks.persistence import TaskPersistence
from ..tasks.task_models import FilterOption, Priority, SortOption
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.storage_backend != "memory":
        settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, storage=None) -> AppState:
    """
    Create AppState from the provided settings.

    settings/storage are injectable for tests; by default they come from get_settings()
    and create_storage(settings).
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if storage is None:
        storage = create_storage(settings)

    persistence = TaskPersistence(storage, settings.storage_key)
    store = TaskStore.open(persistence)

    return AppState(
        settings=settings,
        task_store=store,
        storage=storage,
        filter=FilterOption.parse(settings.default_filter),
        sort=SortOption.parse(settings.default_sort),
        default_priority=Priority(settings.default_priority),
    )
