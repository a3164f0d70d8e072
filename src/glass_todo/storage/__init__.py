"""
Key-value storage backends for persisted task blobs.

- memory: dict, for tests and throwaway sessions
- json: one JSON file on disk (default)
- sqlite: a single kv table
"""

from __future__ import annotations

import logging

from .json_file import JsonFileStorage
from .memory import MemoryStorage
from .sqlite import SqliteStorage

logger = logging.getLogger(__name__)


def create_storage(settings) -> JsonFileStorage | SqliteStorage | MemoryStorage:
    backend = str(getattr(settings, "storage_backend", "json")).lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "sqlite":
        return SqliteStorage(settings.storage_path)
    if backend != "json":
        logger.warning("Unknown storage backend %r; using json.", backend)
    return JsonFileStorage(settings.storage_path)


__all__ = ["JsonFileStorage", "MemoryStorage", "SqliteStorage", "create_storage"]
