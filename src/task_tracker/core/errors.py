# src/task_tracker/core/errors.py

"""
Error taxonomy shared by the engine, the validation layer and the operation layer.

Nothing below the boundary (envelope / console) logs or swallows these:
they are raised and rendered by whoever talks to the outside world.
"""

from __future__ import annotations

from collections.abc import Iterable


class TaskTrackerError(Exception):
    """Base class for all expected (non-bug) failures."""


class ValidationError(TaskTrackerError):
    """Field-level or referential violations found before a mutation is applied."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Validation failed")


class NotFoundError(TaskTrackerError):
    def __init__(self, entity: str, entity_id: str | None = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class AlreadyDoneError(TaskTrackerError):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__("Task is already completed")


class DependenciesUnmetError(TaskTrackerError):
    def __init__(self, task_id: str, unmet: Iterable[str] = ()) -> None:
        self.task_id = task_id
        self.unmet = list(unmet)
        super().__init__("Task cannot be completed. Dependencies are not finished.")


class ReferentialIntegrityError(TaskTrackerError):
    """Deletion refused: other tasks still list this task as a dependency."""

    def __init__(self, task_id: str, dependents: Iterable[str] = ()) -> None:
        self.task_id = task_id
        self.dependents = list(dependents)
        super().__init__("Cannot delete task. It is a dependency for other tasks.")
