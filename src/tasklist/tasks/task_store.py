# src/tasklist/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when a TaskStore call fails (I/O error, constraint violation, ...)."""


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection

    Ordering:
    - every list-returning method returns rows in id order (insertion order)
    """

    def __init__(
        self,
        db_path: str | Path = "tasks.sqlite3",
        *,
        case_sensitive_search: bool = False,
    ) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._case_sensitive = bool(case_sensitive_search)
        self._ensure_schema()
        logger.info(
            "TaskStore ready db=%s total=%s case_sensitive=%s",
            self._db_path,
            self.count_tasks(),
            self._case_sensitive,
        )

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _connect(self, op: str) -> Iterator[sqlite3.Connection]:
        """Open a connection for one call; wrap sqlite errors into StoreError."""
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StoreError(f"{op} failed: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error("TaskStore %s failed: %s", op, e)
            raise StoreError(f"{op} failed: {e}") from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect("ensure_schema") as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    description TEXT NOT NULL,
                    is_completed INTEGER NOT NULL DEFAULT 0
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("is_completed", "INTEGER NOT NULL DEFAULT 0")

            conn.commit()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            description=str(row["description"] or ""),
            is_completed=bool(row["is_completed"]),
        )

    @staticmethod
    def _require_id(task: Task) -> int:
        if task.id is None:
            raise ValueError("task has no id (was it inserted?)")
        return int(task.id)

    @staticmethod
    def _escape_like(pattern: str) -> str:
        return pattern.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connect("count_tasks") as conn:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)

    def fetch_all(self) -> list[Task]:
        with self._connect("fetch_all") as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY id ASC")
            return [self._row_to_task(r) for r in cur.fetchall()]

    def insert(self, task: Task) -> int:
        """Persist a new task; the store assigns (and returns) its id."""
        if not task.description or not task.description.strip():
            raise ValueError("description is required")

        with self._connect("insert") as conn:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO tasks(description, is_completed) VALUES (?, ?)",
                (task.description, int(task.is_completed)),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StoreError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug("Task added id=%s completed=%s", task_id, task.is_completed)
            return task_id

    def update_by_id(self, task: Task) -> None:
        task_id = self._require_id(task)
        with self._connect("update_by_id") as conn:
            cur = conn.execute(
                "UPDATE tasks SET description = ?, is_completed = ? WHERE id = ?",
                (task.description, int(task.is_completed), task_id),
            )
            conn.commit()
            logger.debug("Task updated id=%s rows=%s", task_id, cur.rowcount)

    def delete_by_id(self, task: Task) -> None:
        task_id = self._require_id(task)
        with self._connect("delete_by_id") as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            conn.commit()
            logger.debug("Task deleted id=%s rows=%s", task_id, cur.rowcount)

    def delete_all(self) -> None:
        with self._connect("delete_all") as conn:
            cur = conn.execute("DELETE FROM tasks")
            conn.commit()
            logger.info("All tasks deleted rows=%s", cur.rowcount)

    def search_by_description(self, pattern: str) -> list[Task]:
        """
        Return tasks whose description contains `pattern` as a substring.

        An empty pattern matches every task. Case-sensitivity follows
        the `case_sensitive_search` flag given at construction:
        - False: SQLite LIKE (ASCII case-insensitive), wildcards escaped
        - True: instr() exact substring match
        """
        if not pattern:
            return self.fetch_all()

        with self._connect("search_by_description") as conn:
            cur = conn.cursor()
            if self._case_sensitive:
                cur.execute(
                    "SELECT * FROM tasks WHERE instr(description, ?) > 0 ORDER BY id ASC",
                    (pattern,),
                )
            else:
                cur.execute(
                    "SELECT * FROM tasks WHERE description LIKE ? ESCAPE '\\' ORDER BY id ASC",
                    (f"%{self._escape_like(pattern)}%",),
                )
            return [self._row_to_task(r) for r in cur.fetchall()]
