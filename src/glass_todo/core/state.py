# src/glass_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import AddResult, FilterOption, Priority, SortOption, Task
from ..tasks.task_store import TaskStore
from ..tasks.task_view import project


@dataclass
class AppState:
    """
    Everything a front-end needs, passed around explicitly.

    Owns the TaskStore plus the current filter/sort selection. The visible list is
    recomputed from (tasks, filter, sort) on every call, never cached.
    """

    settings: Any
    task_store: TaskStore
    storage: Any = None

    filter: FilterOption = FilterOption.ALL
    sort: SortOption = SortOption.NEWEST
    default_priority: Priority = Priority.MEDIUM

    # Rows of the last rendered view, so "#n" can address what the user saw.
    last_view: list[Task] = field(default_factory=list)

    # ---- mutations (delegate to the store) ----

    def add_task(self, text: str, priority: Priority | None = None) -> AddResult:
        return self.task_store.add(text, priority or self.default_priority)

    def toggle_task(self, task_id: str) -> Task | None:
        return self.task_store.toggle(task_id)

    def remove_task(self, task_id: str) -> bool:
        return self.task_store.remove(task_id)

    def clear_completed(self) -> int:
        return self.task_store.clear_completed()

    # ---- view selection ----

    def set_filter(self, flt: FilterOption | str) -> FilterOption:
        self.filter = flt if isinstance(flt, FilterOption) else FilterOption.parse(flt)
        return self.filter

    def set_sort(self, sort: SortOption | str) -> SortOption:
        self.sort = sort if isinstance(sort, SortOption) else SortOption.parse(sort)
        return self.sort

    # ---- read side ----

    def visible_tasks(self) -> list[Task]:
        return project(self.task_store.tasks, self.filter, self.sort)

    @property
    def completed_count(self) -> int:
        return self.task_store.completed_count

    @property
    def active_count(self) -> int:
        return self.task_store.active_count
