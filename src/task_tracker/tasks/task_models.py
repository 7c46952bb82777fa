# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values are the human-readable strings clients send and receive.
    - TODO <-> IN_PROGRESS: free, via update
    - -> DONE: via mark_complete (or a guarded update)
    """

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def parse(cls, raw: object) -> TaskStatus | None:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw))
        except ValueError:
            return None


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: object) -> Priority | None:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw))
        except ValueError:
            return None


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str
    priority: Priority
    status: TaskStatus

    created_at: datetime
    updated_at: datetime

    assigned_to: str | None = None
    dependencies: list[str] = field(default_factory=list)

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "status": self.status.value,
            "assignedTo": self.assigned_to,
            "dependencies": list(self.dependencies),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class Change(Generic[T]):
    """An explicitly provided value for a nullable field (Change(None) clears it)."""

    value: T


@dataclass(frozen=True, slots=True)
class TaskUpdate:
    """
    Partial task update.

    None means "not provided" for every slot. The only nullable attribute,
    assigned_to, is wrapped in Change so that "leave as is" (None) and
    "unassign" (Change(None)) stay distinguishable.
    """

    title: str | None = None
    description: str | None = None
    priority: Priority | None = None
    status: TaskStatus | None = None
    assigned_to: Change[str | None] | None = None
    dependencies: list[str] | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> TaskUpdate:
        """
        Build an update from a client payload (camelCase keys).

        - a missing key (or a null text/enum value) leaves the field unchanged
        - a present but empty/falsy "assignedTo" unassigns the task
        - priority/status must already be valid (run validate_task_fields
          first); unknown strings raise ValueError
        """
        priority = payload.get("priority")
        status = payload.get("status")
        assigned: Change[str | None] | None = None
        if "assignedTo" in payload:
            assigned = Change(payload["assignedTo"] or None)
        deps = payload.get("dependencies")
        return cls(
            title=payload.get("title"),
            description=payload.get("description"),
            priority=Priority(priority) if priority is not None else None,
            status=TaskStatus(status) if status is not None else None,
            assigned_to=assigned,
            dependencies=list(deps) if deps is not None else None,
        )
