# src/glass_todo/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.task_models import FilterOption, Priority, SortOption, Task

# handler(state, args, rest): args = whitespace-split arguments, rest = raw text after the name
CommandHandler = Callable[[AppState, list[str], str], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        name, _, rest = line[1:].strip().partition(" ")
        if not name:
            return "Empty command. Use /help to list available commands."

        name = name.lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        rest = rest.strip()
        return handler(state, rest.split(), rest)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def format_task(index: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    created = task.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
    return f"#{index:<3} [{mark}] {task.priority.value:<6} {task.text}  ({created}, id={task.id})"


def render_view(state: AppState) -> str:
    rows = state.visible_tasks()
    state.last_view = rows

    header = (
        f"Filter: {state.filter.value} | Sort: {state.sort.value} | "
        f"{state.active_count} active, {state.completed_count} completed"
    )
    if not rows:
        return f"{header}\n  No tasks found."
    return "\n".join([header, *(format_task(i, t) for i, t in enumerate(rows, start=1))])


def resolve_task_ref(state: AppState, ref: str) -> Task | None:
    """
    "#n" -> n-th row of the last rendered view (1-based); anything else is a task id.
    """
    ref = ref.strip()
    if ref.startswith("#"):
        try:
            n = int(ref[1:])
        except ValueError:
            return None
        if 1 <= n <= len(state.last_view):
            # The row may be stale (task removed since the last render).
            return state.task_store.get(state.last_view[n - 1].id)
        return None
    return state.task_store.get(ref)


# ---- handlers ----


def cmd_help(state: AppState, args: list[str], rest: str) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str], rest: str) -> str:
    """
    /add <text>                -> default priority
    /add high|medium|low <text>
    """
    priority: Priority | None = None
    text = rest
    if args and args[0].lower() in {p.value for p in Priority}:
        priority = Priority(args[0].lower())
        text = rest[len(args[0]):]

    return add_task_reply(state, text, priority)


def add_task_reply(state: AppState, text: str, priority: Priority | None = None) -> str:
    """Add `text` verbatim (no priority-word parsing) and describe the outcome."""
    result = state.add_task(text, priority)
    if result.error is not None:
        return result.error.message
    task = result.task
    if task is None:
        return "Task was not added."
    return f"Added ({task.priority.value}): {task.text}\n" + render_view(state)


def cmd_toggle(state: AppState, args: list[str], rest: str) -> str:
    if not args:
        return "Usage: /toggle <#n | id>"
    task = resolve_task_ref(state, args[0])
    if task is None:
        return f"No such task: {args[0]}"
    updated = state.toggle_task(task.id)
    if updated is None:
        return f"No such task: {args[0]}"
    status = "completed" if updated.completed else "active"
    return f"Marked {status}: {updated.text}\n" + render_view(state)


def cmd_remove(state: AppState, args: list[str], rest: str) -> str:
    if not args:
        return "Usage: /rm <#n | id>"
    task = resolve_task_ref(state, args[0])
    if task is None or not state.remove_task(task.id):
        return f"No such task: {args[0]}"
    return f"Removed: {task.text}\n" + render_view(state)


def cmd_clear(state: AppState, args: list[str], rest: str) -> str:
    removed = state.clear_completed()
    if not removed:
        return "No completed tasks to clear."
    return f"Cleared {removed} completed task(s).\n" + render_view(state)


def cmd_filter(state: AppState, args: list[str], rest: str) -> str:
    if not args:
        choices = " | ".join(f.value for f in FilterOption)
        return f"Filter is {state.filter.value}. Usage: /filter {choices}"
    try:
        state.set_filter(args[0])
    except ValueError as e:
        return str(e)
    return render_view(state)


def cmd_sort(state: AppState, args: list[str], rest: str) -> str:
    if not args:
        choices = " | ".join(s.value for s in SortOption)
        return f"Sort is {state.sort.value}. Usage: /sort {choices}"
    try:
        state.set_sort(args[0])
    except ValueError as e:
        return str(e)
    return render_view(state)


def cmd_list(state: AppState, args: list[str], rest: str) -> str:
    return render_view(state)


def cmd_status(state: AppState, args: list[str], rest: str) -> str:
    settings = state.settings
    return (
        "Status:\n"
        f"  Tasks: {len(state.task_store)} ({state.active_count} active, "
        f"{state.completed_count} completed)\n"
        f"  View: filter={state.filter.value} sort={state.sort.value}\n"
        f"  Default priority: {state.default_priority.value}\n"
        f"  Storage: {getattr(settings, 'storage_backend', '?')} "
        f"key={getattr(settings, 'storage_key', '?')}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add [low|medium|high] <text>.", aliases=["a"])
registry.register("toggle", cmd_toggle, help_text="Toggle completion: /toggle <#n | id>.", aliases=["t", "done"])
registry.register("rm", cmd_remove, help_text="Remove a task: /rm <#n | id>.", aliases=["del", "remove"])
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("filter", cmd_filter, help_text="Filter view: /filter all | active | completed.", aliases=["f"])
registry.register(
    "sort", cmd_sort, help_text="Sort view: /sort newest | oldest | priority | alphabetical.", aliases=["s"]
)
registry.register("list", cmd_list, help_text="Show the current view.", aliases=["ls", "l"])
registry.register("status", cmd_status, help_text="Show counts, view and storage settings.")
