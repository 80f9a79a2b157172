# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single to-do item.

    Notes:
    - id is assigned by the store on insert (None before that) and never changes.
    - edits and toggles produce a full replacement record with the same id.
    """

    description: str
    is_completed: bool = False
    id: int | None = None

    def with_description(self, description: str) -> Task:
        return replace(self, description=description)

    def toggled(self) -> Task:
        return replace(self, is_completed=not self.is_completed)
