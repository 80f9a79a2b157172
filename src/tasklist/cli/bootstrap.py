# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite TaskStore into a TaskCoordinator and AppState,
- loads the first snapshot.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.coordinator import TaskCoordinator
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(
        settings.tasks_db_path,
        case_sensitive_search=bool(getattr(settings, "case_sensitive_search", False)),
    )
    coordinator = TaskCoordinator(
        store,
        validate=bool(getattr(settings, "validate_descriptions", True)),
    )
    coordinator.initialize()
    logger.info("Loaded %d task(s) from %s", len(coordinator.tasks), settings.tasks_db_path)

    return AppState(settings=settings, task_store=store, coordinator=coordinator)
