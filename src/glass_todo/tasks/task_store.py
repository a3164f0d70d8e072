# src/glass_todo/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from ..core.ports import Clock, IdSource, MonotonicIdSource, utc_now
from .persistence import TaskPersistence
from .task_models import (
    MAX_TEXT_LENGTH,
    MIN_TEXT_LENGTH,
    AddResult,
    Priority,
    Task,
    ValidationError,
)

logger = logging.getLogger(__name__)


def validate(text: str, existing_tasks: Iterable[Task]) -> ValidationError | None:
    """
    Check a candidate task text against the current collection.

    Returns None when the text is acceptable, otherwise the first failing rule
    (empty -> too short -> too long -> duplicate).
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return ValidationError.EMPTY_TEXT
    if len(trimmed) < MIN_TEXT_LENGTH:
        return ValidationError.TOO_SHORT
    if len(trimmed) > MAX_TEXT_LENGTH:
        return ValidationError.TOO_LONG

    folded = trimmed.casefold()
    if any(t.text.strip().casefold() == folded for t in existing_tasks):
        return ValidationError.DUPLICATE_TEXT
    return None


class TaskStore:
    """
    In-memory ordered task collection (newest first).

    Persistence is write-through:
    - every successful mutation ends with a full save
    - failed adds and no-op toggles/removes do not write
    - a failed save is logged by the persistence layer and never undoes the mutation

    Tasks are frozen; toggling swaps in a replacement with the same id.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        persistence: TaskPersistence | None = None,
        clock: Clock = utc_now,
        id_source: IdSource | None = None,
    ) -> None:
        self._tasks: list[Task] = list(tasks)
        self._persistence = persistence
        self._clock = clock
        self._new_id = id_source or MonotonicIdSource()

    @classmethod
    def open(
        cls,
        persistence: TaskPersistence,
        *,
        clock: Clock = utc_now,
        id_source: IdSource | None = None,
    ) -> TaskStore:
        """Build a store from whatever the persistence layer holds (once, at startup)."""
        store = cls(persistence.load(), persistence=persistence, clock=clock, id_source=id_source)
        logger.info(
            "TaskStore ready key=%s total=%d active=%d",
            persistence.key,
            len(store),
            store.active_count,
        )
        return store

    # ---- queries ----

    @property
    def tasks(self) -> Sequence[Task]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self._tasks if t.completed)

    @property
    def active_count(self) -> int:
        return sum(1 for t in self._tasks if not t.completed)

    # ---- mutations ----

    def validate(self, text: str) -> ValidationError | None:
        return validate(text, self._tasks)

    def add(self, text: str, priority: Priority = Priority.MEDIUM) -> AddResult:
        error = self.validate(text)
        if error is not None:
            logger.debug("Task rejected: %s", error.value)
            return AddResult(error=error)

        task = Task(
            id=self._fresh_id(),
            text=text.strip(),
            completed=False,
            created_at=self._clock(),
            priority=Priority(priority),
        )
        self._tasks.insert(0, task)
        logger.debug("Task added id=%s priority=%s", task.id, task.priority.value)
        self._persist()
        return AddResult(task=task)

    def toggle(self, task_id: str) -> Task | None:
        """Flip `completed` on the matching task. Unknown id -> None, nothing written."""
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                updated = replace(t, completed=not t.completed)
                self._tasks[i] = updated
                logger.debug("Task toggled id=%s completed=%s", task_id, updated.completed)
                self._persist()
                return updated
        return None

    def remove(self, task_id: str) -> bool:
        kept = [t for t in self._tasks if t.id != task_id]
        if len(kept) == len(self._tasks):
            return False
        self._tasks = kept
        logger.debug("Task removed id=%s", task_id)
        self._persist()
        return True

    def clear_completed(self) -> int:
        """Drop every completed task; returns how many were removed."""
        kept = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(kept)
        if not removed:
            return 0
        self._tasks = kept
        logger.debug("Cleared %d completed tasks", removed)
        self._persist()
        return removed

    # ---- internals ----

    def _fresh_id(self) -> str:
        taken = {t.id for t in self._tasks}
        while True:
            tid = self._new_id()
            if tid not in taken:
                return tid

    def _persist(self) -> None:
        if self._persistence is not None:
            self._persistence.save(self._tasks)
