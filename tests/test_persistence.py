# tests/test_persistence.py

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime

import pytest

from glass_todo.tasks.persistence import (
    DeserializationError,
    TaskPersistence,
    decode_tasks,
    format_timestamp,
    parse_timestamp,
)
from glass_todo.tasks.task_models import Priority, Task

from .fakes import FailingStorage, FakeClock, RecordingStorage

KEY = "glassmorphic-todo-tasks"
NOW = datetime(2024, 6, 1, 8, 30, tzinfo=UTC)


def _tasks() -> list[Task]:
    return [
        Task(
            id="1717230600123",
            text="Buy milk",
            created_at=datetime(2024, 6, 1, 8, 30, 0, 123000, tzinfo=UTC),
            completed=True,
            priority=Priority.HIGH,
        ),
        Task(
            id="1717230500000",
            text="Café au lait",
            created_at=datetime(2024, 6, 1, 8, 28, 20, tzinfo=UTC),
        ),
    ]


def test_save_then_load_round_trip() -> None:
    storage = RecordingStorage()
    p = TaskPersistence(storage, KEY)

    assert p.save(_tasks()) is True
    assert p.load() == _tasks()


def test_blob_layout() -> None:
    storage = RecordingStorage()
    TaskPersistence(storage, KEY).save(_tasks())

    data = json.loads(storage.data[KEY])
    assert data[0] == {
        "id": "1717230600123",
        "text": "Buy milk",
        "completed": True,
        "createdAt": "2024-06-01T08:30:00.123Z",
        "priority": "high",
    }
    assert data[1]["priority"] == "medium"


def test_timestamp_helpers() -> None:
    assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=UTC)) == "2024-01-02T03:04:05.678Z"
    assert parse_timestamp("2024-01-02T03:04:05.678Z") == datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)
    # naive timestamps are read as UTC
    assert parse_timestamp("2024-01-02T03:04:05") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


def test_missing_key_loads_empty() -> None:
    assert TaskPersistence(RecordingStorage(), KEY).load() == []


@pytest.mark.parametrize("blob", ["{not json", '{"id": 1}', "42", "null"])
def test_malformed_blob_is_logged_and_treated_as_empty(blob: str, caplog: pytest.LogCaptureFixture) -> None:
    p = TaskPersistence(RecordingStorage({KEY: blob}), KEY)
    with caplog.at_level(logging.WARNING, logger="glass_todo.tasks.persistence"):
        assert p.load() == []
    assert any("Failed to load tasks" in r.getMessage() for r in caplog.records)


def test_decode_raises_on_non_list() -> None:
    with pytest.raises(DeserializationError):
        decode_tasks('{"tasks": []}', now=NOW)


def test_decode_tolerates_minimal_variant_records() -> None:
    blob = json.dumps(
        [
            {"id": 1717230600000, "text": "legacy task", "completed": False},
            {"id": "x1", "text": "  padded  ", "completed": True, "priority": "urgent"},
            {"id": "x2", "text": "bad date", "createdAt": "yesterday"},
            {"text": "no id"},
            {"id": "x3", "text": "   "},
            "not an object",
            {"id": "x1", "text": "duplicate id"},
        ]
    )
    tasks = decode_tasks(blob, now=NOW)

    assert [t.id for t in tasks] == ["1717230600000", "x1", "x2"]
    legacy, padded, bad_date = tasks
    assert legacy.created_at == datetime(2024, 6, 1, 8, 30, tzinfo=UTC)
    assert legacy.priority is Priority.MEDIUM
    assert padded.text == "padded"
    assert padded.completed is True
    assert padded.priority is Priority.MEDIUM
    assert bad_date.created_at == NOW


def test_missing_created_at_falls_back_to_clock() -> None:
    clock = FakeClock(start=NOW)
    blob = json.dumps([{"id": "abc", "text": "no timestamp", "completed": False}])
    p = TaskPersistence(RecordingStorage({KEY: blob}), KEY, clock=clock)

    (task,) = p.load()
    assert task.created_at == NOW


def test_save_failure_is_swallowed(caplog: pytest.LogCaptureFixture) -> None:
    storage = FailingStorage()
    p = TaskPersistence(storage, KEY)
    with caplog.at_level(logging.ERROR, logger="glass_todo.tasks.persistence"):
        assert p.save(_tasks()) is False
    assert storage.attempts == 1
    assert any("Failed to save tasks" in r.getMessage() for r in caplog.records)


def test_read_failure_loads_empty() -> None:
    assert TaskPersistence(FailingStorage(fail_reads=True), KEY).load() == []


def test_keys_are_independent() -> None:
    storage = RecordingStorage()
    TaskPersistence(storage, KEY).save(_tasks())
    assert TaskPersistence(storage, "tasks").load() == []


def test_completed_flag_requires_json_true() -> None:
    blob = json.dumps(
        [
            {"id": "a", "text": "string false", "completed": "false"},
            {"id": "b", "text": "numeric one", "completed": 1},
            {"id": "c", "text": "real true", "completed": True},
            {"id": "d", "text": "missing flag"},
        ]
    )
    flags = {t.id: t.completed for t in decode_tasks(blob, now=NOW)}
    assert flags == {"a": False, "b": False, "c": True, "d": False}


def test_integral_float_ids_lose_the_fraction() -> None:
    blob = json.dumps(
        [
            {"id": 1.7e12, "text": "float id", "completed": False},
            {"id": 12.5, "text": "fractional id", "completed": False},
        ]
    )
    tasks = decode_tasks(blob, now=NOW)
    assert [t.id for t in tasks] == ["1700000000000", "12.5"]
    assert tasks[0].created_at == datetime.fromtimestamp(1.7e9, tz=UTC)
