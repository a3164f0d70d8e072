# src/glass_todo/tasks/persistence.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from ..core.ports import Clock, KeyValueStorage, utc_now
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "glassmorphic-todo-tasks"


class DeserializationError(Exception):
    """The persisted blob could not be turned back into tasks."""


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a 'Z' suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(raw: str) -> datetime:
    dt = datetime.fromisoformat(raw.strip())
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "createdAt": format_timestamp(task.created_at),
        "priority": task.priority.value,
    }


def _created_at_from(raw: dict[str, Any], fallback: datetime) -> datetime:
    value = raw.get("createdAt")
    if isinstance(value, str) and value.strip():
        try:
            return parse_timestamp(value)
        except ValueError:
            logger.warning("Bad createdAt %r for task id=%r; using load time.", value, raw.get("id"))
            return fallback

    # Older blobs had no createdAt; their ids were Date.now() milliseconds.
    tid = raw.get("id")
    if isinstance(tid, (int, float)) and not isinstance(tid, bool) and tid > 0:
        try:
            return datetime.fromtimestamp(tid / 1000.0, tz=UTC)
        except (OverflowError, OSError, ValueError):
            pass
    return fallback


def task_from_dict(raw: dict[str, Any], *, now: datetime) -> Task | None:
    """
    Decode one record. Returns None for records that cannot be a task (no id / no text).
    """
    tid = raw.get("id")
    text = raw.get("text")
    if tid is None or isinstance(tid, bool) or not isinstance(text, str) or not text.strip():
        return None

    if isinstance(tid, float) and tid.is_integer():
        tid = int(tid)

    return Task(
        id=str(tid),
        text=text.strip(),
        # Only JSON true; "false" and 1 stay active.
        completed=raw.get("completed") is True,
        created_at=_created_at_from(raw, now),
        priority=Priority.from_raw(raw.get("priority")),
    )


def decode_tasks(blob: str, *, now: datetime) -> list[Task]:
    try:
        data = json.loads(blob)
    except ValueError as e:
        raise DeserializationError(f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise DeserializationError(f"expected a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    seen: set[str] = set()
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("Skipping persisted task #%d: not an object.", i)
            continue
        task = task_from_dict(item, now=now)
        if task is None:
            logger.warning("Skipping persisted task #%d: missing id or text.", i)
            continue
        if task.id in seen:
            logger.warning("Skipping persisted task #%d: duplicate id=%s.", i, task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return out


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False)


class TaskPersistence:
    """
    Whole-collection persistence over a KeyValueStorage.

    One JSON array under one key. Every save overwrites the full blob;
    there is no incremental diffing. Both directions are best-effort:
    load() falls back to [] and save() only logs on failure.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_STORAGE_KEY,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Task]:
        try:
            blob = self._storage.get(self._key)
        except Exception:
            logger.exception("Storage read failed key=%s; starting empty.", self._key)
            return []

        if blob is None:
            logger.debug("No persisted tasks under key=%s.", self._key)
            return []

        try:
            tasks = decode_tasks(blob, now=self._clock())
        except DeserializationError as e:
            logger.warning("Failed to load tasks key=%s: %s; starting empty.", self._key, e)
            return []

        logger.info("Loaded %d tasks from key=%s", len(tasks), self._key)
        return tasks

    def save(self, tasks: Iterable[Task]) -> bool:
        """Returns True if the write went through."""
        try:
            blob = encode_tasks(tasks)
            self._storage.set(self._key, blob)
        except Exception:
            logger.exception("Failed to save tasks key=%s (in-memory state kept).", self._key)
            return False
        logger.debug("Saved tasks key=%s bytes=%d", self._key, len(blob))
        return True
