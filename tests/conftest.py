# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from glass_todo.core.state import AppState
from glass_todo.tasks.persistence import TaskPersistence
from glass_todo.tasks.task_store import TaskStore

from .fakes import FakeClock, RecordingStorage, SequentialIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than the real Settings.from_env(),
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="glass-todo-test",
        log_level="INFO",
        console_enabled=True,
        data_dir=tmp_path / "data",
        log_dir=tmp_path / "data",
        storage_backend="json",
        storage_path=tmp_path / "data" / "tasks.json",
        storage_key="glassmorphic-todo-tasks",
        default_priority="medium",
        default_filter="all",
        default_sort="newest",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def persistence(storage: RecordingStorage, clock: FakeClock) -> TaskPersistence:
    return TaskPersistence(storage, "glassmorphic-todo-tasks", clock=clock)


@pytest.fixture()
def store(persistence: TaskPersistence, clock: FakeClock) -> TaskStore:
    return TaskStore.open(persistence, clock=clock, id_source=SequentialIds())


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, storage: RecordingStorage) -> AppState:
    """
    AppState wired with deterministic fakes (fake clock, sequential ids, in-memory storage).
    """
    return AppState(settings=settings, task_store=store, storage=storage)
