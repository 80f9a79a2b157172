# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.ports import Snapshot
from ..core.state import AppState
from ..tasks.task_store import StoreError

logger = logging.getLogger(__name__)

PROMPT = ">>> "


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def render_tasks(tasks: Snapshot) -> str:
    """Plain-text rendering of a snapshot, one numbered line per task."""
    if not tasks:
        return "(no tasks)"
    lines = []
    for i, t in enumerate(tasks, start=1):
        marker = "[x]" if t.is_completed else "[ ]"
        lines.append(f"{i:>3}. {marker} {t.description}")
    return "\n".join(lines)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")

    show_ts = bool(getattr(state.settings, "show_timestamps", True))

    def say(text: str) -> None:
        if show_ts:
            print(f"[{_ts_local()}] {text}", flush=True)
        else:
            print(text, flush=True)

    def on_snapshot(tasks: Snapshot) -> None:
        print(render_tasks(tasks), flush=True)

    unsubscribe = state.coordinator.snapshot.subscribe(on_snapshot)
    say("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.")
    on_snapshot(state.coordinator.tasks)

    try:
        while True:
            try:
                user_input = input(PROMPT).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            # Plain text adds a task; everything else is a command.
            line = user_input if user_input.startswith("/") else f"/add {user_input}"

            try:
                with state.lock:
                    reply = command_registry.handle(state, line, emit=say)
            except StoreError as e:
                logger.warning("Store failure: %s", e)
                say(f"[STORE] {e}. The list was not changed.")
                continue
            except Exception:
                logger.exception("Command handler crashed.")
                say("Internal error while handling a command.")
                continue

            if reply:
                say(reply)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
