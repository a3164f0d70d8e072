# src/glass_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store and persistence depend on Protocols instead of concrete implementations.
This keeps storage backends swappable and makes testing easier.
"""

import time
from datetime import UTC, datetime
from typing import Protocol


class KeyValueStorage(Protocol):
    """
    String key -> string value store (browser localStorage equivalent).

    get() returns None when the key is absent.
    set() overwrites unconditionally and may raise (e.g. disk full); callers decide
    whether that is fatal.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class Clock(Protocol):
    """Returns the current time as a timezone-aware datetime."""
    def __call__(self) -> datetime: ...


class IdSource(Protocol):
    """Returns a fresh task id, unique within the session."""
    def __call__(self) -> str: ...


def utc_now() -> datetime:
    """Current UTC time, truncated to milliseconds (the precision of the persisted form)."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class MonotonicIdSource:
    """
    Millisecond-timestamp ids.

    Two calls within the same millisecond (or a clock step backwards) would repeat an id,
    so the counter never goes below last issued + 1.
    """

    def __init__(self, now_ms=None) -> None:
        self._now_ms = now_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def __call__(self) -> str:
        candidate = int(self._now_ms())
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)
