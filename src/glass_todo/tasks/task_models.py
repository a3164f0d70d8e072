# src/glass_todo/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

MIN_TEXT_LENGTH = 3
MAX_TEXT_LENGTH = 100


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def from_raw(cls, raw: object) -> Priority:
        """Lenient decode for persisted values: unknown/missing -> MEDIUM."""
        if not isinstance(raw, str) or not raw:
            return cls.MEDIUM
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.MEDIUM


_PRIORITY_RANK = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
}


class ValidationError(StrEnum):
    """
    Reasons a new task text is rejected.

    These are returned as values (never raised): the caller shows `message`
    inline and the collection stays untouched.
    """

    EMPTY_TEXT = "empty_text"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    DUPLICATE_TEXT = "duplicate_text"

    @property
    def message(self) -> str:
        return _VALIDATION_MESSAGES[self]


_VALIDATION_MESSAGES = {
    ValidationError.EMPTY_TEXT: "Task cannot be empty",
    ValidationError.TOO_SHORT: f"Task must be at least {MIN_TEXT_LENGTH} characters long",
    ValidationError.TOO_LONG: f"Task must be less than {MAX_TEXT_LENGTH} characters",
    ValidationError.DUPLICATE_TEXT: "Task already exists",
}


class _ParsableOption(StrEnum):
    @classmethod
    def parse(cls, raw: str):
        key = (raw or "").strip().lower()
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown {cls.__name__} {raw!r} (expected one of: {choices})") from None


class FilterOption(_ParsableOption):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class SortOption(_ParsableOption):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRIORITY = "priority"
    ALPHABETICAL = "alphabetical"


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    created_at: datetime
    completed: bool = False
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True, slots=True)
class AddResult:
    task: Task | None = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.task is not None
