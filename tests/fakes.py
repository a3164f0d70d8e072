# tests/fakes.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta


class FakeClock:
    """
    Deterministic clock for unit tests.

    Each call returns the current value and then advances by `step`,
    so consecutive tasks get strictly increasing created_at.
    """

    def __init__(
        self,
        start: datetime = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC),
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        self.calls += 1
        return current


class SequentialIds:
    def __init__(self, start: int = 1) -> None:
        self.next = start

    def __call__(self) -> str:
        tid = str(self.next)
        self.next += 1
        return tid


class RecordingStorage:
    """In-memory KeyValueStorage that records every write."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.data[key] = value


class FailingStorage(RecordingStorage):
    """Storage whose writes (and optionally reads) always blow up."""

    def __init__(self, *, fail_reads: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.fail_reads = fail_reads
        self.attempts = 0

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("read failed")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        self.attempts += 1
        raise OSError("quota exceeded")
