# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.coordinator import TaskCoordinator
from tasklist.core.state import AppState
from tasklist.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="WARNING",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        case_sensitive_search=False,
        validate_descriptions=True,
        show_timestamps=False,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def coordinator(store: TaskStore) -> TaskCoordinator:
    """
    Coordinator over a real SQLite store.

    NOTE: We keep the real TaskStore here because search/ordering semantics
    are part of what we want to test.
    """
    coord = TaskCoordinator(store)
    coord.initialize()
    return coord


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, coordinator: TaskCoordinator) -> AppState:
    return AppState(settings=settings, task_store=store, coordinator=coordinator)
