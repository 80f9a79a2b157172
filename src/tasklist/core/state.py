# src/tasklist/core/state.py

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from ..tasks.task_store import TaskStore
    from .coordinator import TaskCoordinator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(Generic[T]):
    """
    Single-value publish/subscribe container.

    - `value` holds the last published value
    - `publish()` replaces it and notifies every listener with the new value
    - a listener that raises is logged and skipped; the others still run
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Callable[[T], None]] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, value: T) -> None:
        with self._lock:
            self._value = value
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(value)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskStore
    coordinator: TaskCoordinator

    # Serializes console input handling with any other caller of the coordinator.
    lock: threading.RLock = field(default_factory=threading.RLock)
