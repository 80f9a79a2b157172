# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The coordinator depends on Protocols instead of concrete implementations.
This keeps the storage backend swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from ..tasks.task_models import Task

Snapshot = tuple[Task, ...]
# The complete ordered task list currently shown; never a delta.

SnapshotListener = Callable[[Snapshot], None]


class TaskRepo(Protocol):
    """Record Store contract consumed by the coordinator."""

    def fetch_all(self) -> Sequence[Task]: ...
    def insert(self, task: Task) -> int: ...
    def update_by_id(self, task: Task) -> None: ...
    def delete_by_id(self, task: Task) -> None: ...
    def delete_all(self) -> None: ...
    def search_by_description(self, pattern: str) -> Sequence[Task]: ...
