# src/tasklist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, str], str]
CommandHandler3 = Callable[[AppState, str, CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

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

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command rest of line".
        The handler receives the rest of the line verbatim (only stripped).
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

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        rest = rest.strip()
        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, rest, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, rest)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Plain text (no leading /) adds a task. /exit quits.")
        return "\n".join(lines)


registry = CommandRegistry()


def _task_at(state: AppState, raw: str) -> Task | str:
    """Resolve a 1-based position in the displayed list; error text on failure."""
    try:
        n = int(raw)
    except ValueError:
        return f"Not a task number: {raw!r}."
    tasks = state.coordinator.tasks
    if n < 1 or n > len(tasks):
        return f"No task #{n} in the current list."
    return tasks[n - 1]


def cmd_help(state: AppState, rest: str) -> str:
    return registry.build_help()


def cmd_status(state: AppState, rest: str) -> str:
    settings = state.settings
    shown = len(state.coordinator.tasks)
    total = state.task_store.count_tasks()
    search_mode = "case-sensitive" if getattr(settings, "case_sensitive_search", False) else "case-insensitive"
    return (
        "Status:\n"
        f"  Database: {getattr(settings, 'tasks_db_path', '?')}\n"
        f"  Shown: {shown} of {total} task(s)\n"
        f"  Search: {search_mode}"
    )


def cmd_list(state: AppState, rest: str) -> str:
    # Re-publishing the current snapshot makes subscribers re-render it.
    state.coordinator.snapshot.publish(state.coordinator.tasks)
    return ""


def cmd_add(state: AppState, rest: str) -> str:
    if not rest:
        return "Usage: /add <text>"
    state.coordinator.add(rest)
    return "Task added."


def cmd_edit(state: AppState, rest: str) -> str:
    pos, _, text = rest.partition(" ")
    text = text.strip()
    if not pos or not text:
        return "Usage: /edit <n> <new text>"
    target = _task_at(state, pos)
    if isinstance(target, str):
        return target
    state.coordinator.edit(target, text)
    return f"Task #{pos} edited."


def cmd_toggle(state: AppState, rest: str) -> str:
    if not rest:
        return "Usage: /toggle <n>"
    target = _task_at(state, rest)
    if isinstance(target, str):
        return target
    state.coordinator.toggle_completion(target)
    return f"Task marked {'pending' if target.is_completed else 'completed'}."


def cmd_delete(state: AppState, rest: str) -> str:
    if not rest:
        return "Usage: /del <n>"
    target = _task_at(state, rest)
    if isinstance(target, str):
        return target
    state.coordinator.delete(target)
    return "Task deleted."


def cmd_clear(state: AppState, rest: str, emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Deleting every task...")
    logger.debug("Delete-all requested (shown=%d)", len(state.coordinator.tasks))
    state.coordinator.delete_all()
    return "All tasks deleted."


def cmd_search(state: AppState, rest: str) -> str:
    found = state.coordinator.search(rest)
    if not rest:
        return f"Showing all {len(found)} task(s)."
    return f"{len(found)} task(s) matching {rest!r}."


def cmd_done(state: AppState, rest: str) -> str:
    state.coordinator.filter_completed()
    return "Showing completed tasks."


def cmd_pending(state: AppState, rest: str) -> str:
    state.coordinator.filter_pending()
    return "Showing pending tasks."


def cmd_all(state: AppState, rest: str) -> str:
    state.coordinator.show_all()
    return "Showing all tasks."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show database path and task counts.")
registry.register("list", cmd_list, help_text="Re-print the current list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"])
registry.register("edit", cmd_edit, help_text="Replace a task's text: /edit <n> <new text>.", aliases=["e"])
registry.register("toggle", cmd_toggle, help_text="Flip completed/pending: /toggle <n>.", aliases=["t", "x"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <n>.", aliases=["rm", "delete"])
registry.register("clear", cmd_clear, help_text="Delete every task.")
registry.register("search", cmd_search, help_text="Show tasks containing text: /search <text>.", aliases=["s", "find"])
registry.register("done", cmd_done, help_text="Narrow the current list to completed tasks.", aliases=["completed"])
registry.register("pending", cmd_pending, help_text="Narrow the current list to pending tasks.")
registry.register("all", cmd_all, help_text="Reload every task from the database.")
