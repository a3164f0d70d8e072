# src/glass_todo/tasks/task_view.py

from __future__ import annotations

import locale
import unicodedata
from collections.abc import Iterable

from .task_models import FilterOption, SortOption, Task


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(text: str) -> tuple[str, str, str]:
    """
    Locale-aware ordering key for task text.

    Levels, like a browser's localeCompare:
    - base letters (accents and case folded away): "école" sorts with "e", not after "z"
    - accents, case-insensitive
    - raw text, so "apple" and "Apple" still have a deterministic order

    Each level goes through the process LC_COLLATE (set at startup by cli.main).
    """
    folded = text.casefold()
    return (
        locale.strxfrm(_strip_accents(folded)),
        locale.strxfrm(folded),
        locale.strxfrm(text),
    )


def filter_tasks(tasks: Iterable[Task], flt: FilterOption) -> list[Task]:
    if flt is FilterOption.ACTIVE:
        return [t for t in tasks if not t.completed]
    if flt is FilterOption.COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)


def sort_tasks(tasks: Iterable[Task], sort: SortOption) -> list[Task]:
    # sorted() is stable, so ties keep their prior (store) order.
    if sort is SortOption.OLDEST:
        return sorted(tasks, key=lambda t: t.created_at)
    if sort is SortOption.PRIORITY:
        return sorted(tasks, key=lambda t: t.priority.rank, reverse=True)
    if sort is SortOption.ALPHABETICAL:
        return sorted(tasks, key=lambda t: collation_key(t.text))
    return sorted(tasks, key=lambda t: t.created_at, reverse=True)


def project(
    tasks: Iterable[Task],
    flt: FilterOption = FilterOption.ALL,
    sort: SortOption = SortOption.NEWEST,
) -> list[Task]:
    """
    Filtered + sorted read-only view of `tasks`.

    Always returns a new list; the input sequence and its Task objects are left as-is.
    """
    return sort_tasks(filter_tasks(tasks, flt), sort)
