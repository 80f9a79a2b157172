# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console task screen
in the main thread until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_store import StoreError

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # TaskStore uses short-lived sqlite connections per call; close() is a no-op hook.
    try:
        state.task_store.close()
    except Exception:
        logger.debug("TaskStore close failed.", exc_info=True)


def main() -> int:
    settings = get_settings()

    # choose console log level from settings.log_level; the file always gets DEBUG
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log=%s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except StoreError as e:
        logger.error("Cannot open task database %s: %s", settings.tasks_db_path, e)
        return 1

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
