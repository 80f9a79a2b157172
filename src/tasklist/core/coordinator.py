# src/tasklist/core/coordinator.py

"""
Task coordinator.

Owns the observable snapshot of the currently displayed task list and
mediates every user operation:

    operation -> store call -> publish a complete new snapshot

Operations run one at a time (RLock), so a refresh from one operation can
never overwrite the result of a later one. If the store call fails the
exception propagates and the snapshot keeps its last published value.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from ..tasks.task_models import Task
from .ports import Snapshot, TaskRepo
from .state import Observable

logger = logging.getLogger(__name__)


class TaskCoordinator:
    def __init__(self, repo: TaskRepo, *, validate: bool = True) -> None:
        self._repo = repo
        self._validate = validate
        self._lock = threading.RLock()
        self.snapshot: Observable[Snapshot] = Observable(())

    @property
    def tasks(self) -> Snapshot:
        return self.snapshot.value

    # ---- internals ----

    def _publish(self, tasks: Iterable[Task], op: str) -> Snapshot:
        snap = tuple(tasks)
        self.snapshot.publish(snap)
        logger.debug("Snapshot published op=%s size=%d", op, len(snap))
        return snap

    def _refresh(self, op: str) -> Snapshot:
        return self._publish(self._repo.fetch_all(), op)

    def _check_description(self, description: str) -> None:
        if self._validate and not (description or "").strip():
            raise ValueError("description must not be empty")

    # ---- store-backed operations ----

    def initialize(self) -> Snapshot:
        with self._lock:
            return self._refresh("initialize")

    def add(self, description: str) -> Snapshot:
        self._check_description(description)
        with self._lock:
            task_id = self._repo.insert(Task(description=description))
            logger.info("Task added id=%s", task_id)
            return self._refresh("add")

    def edit(self, target: Task, new_description: str) -> Snapshot:
        self._check_description(new_description)
        with self._lock:
            self._repo.update_by_id(target.with_description(new_description))
            logger.info("Task edited id=%s", target.id)
            return self._refresh("edit")

    def toggle_completion(self, target: Task) -> Snapshot:
        with self._lock:
            updated = target.toggled()
            self._repo.update_by_id(updated)
            logger.info("Task toggled id=%s completed=%s", target.id, updated.is_completed)
            return self._refresh("toggle_completion")

    def delete(self, target: Task) -> Snapshot:
        with self._lock:
            self._repo.delete_by_id(target)
            logger.info("Task deleted id=%s", target.id)
            return self._refresh("delete")

    def delete_all(self) -> Snapshot:
        with self._lock:
            self._repo.delete_all()
            logger.info("All tasks deleted")
            # Result is known; no refresh round-trip.
            return self._publish((), "delete_all")

    def search(self, query: str) -> Snapshot:
        with self._lock:
            return self._publish(self._repo.search_by_description(query), "search")

    def show_all(self) -> Snapshot:
        with self._lock:
            return self._refresh("show_all")

    # ---- snapshot-only filters ----
    # These narrow whatever is currently loaded (e.g. a prior search),
    # not the full store.

    def filter_completed(self) -> Snapshot:
        with self._lock:
            return self._publish((t for t in self.tasks if t.is_completed), "filter_completed")

    def filter_pending(self) -> Snapshot:
        with self._lock:
            return self._publish((t for t in self.tasks if not t.is_completed), "filter_pending")
