# src/task_tracker/validation.py

"""
Validation layer.

Pure checks run before any mutation. Every function collects all violated
rules into one list instead of stopping at the first problem. The only side
effect allowed is reading the stores for existence checks.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .core.errors import ValidationError
from .core.ports import TaskLookup, UserLookup
from .tasks.task_models import Priority, TaskStatus


def _allowed(values: Iterable[str]) -> str:
    items = list(values)
    return ", ".join(items[:-1]) + f", or {items[-1]}"


PRIORITY_ERROR = f"Priority must be {_allowed(p.value for p in Priority)}"
STATUS_ERROR = f"Status must be {_allowed(s.value for s in TaskStatus)}"
DEPENDENCIES_ERROR = "Dependencies must be a list of task IDs"


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def merge(self, *others: ValidationResult) -> ValidationResult:
        merged = list(self.errors)
        for other in others:
            merged.extend(other.errors)
        return ValidationResult(merged)

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ValidationError(self.errors)


def _blank(value: object) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def validate_task_fields(
    title: object, description: object, priority: object, status: object
) -> ValidationResult:
    errors: list[str] = []

    if _blank(title):
        errors.append("Title is required")
    if _blank(description):
        errors.append("Description is required")
    if Priority.parse(priority) is None:
        errors.append(PRIORITY_ERROR)
    if TaskStatus.parse(status) is None:
        errors.append(STATUS_ERROR)

    return ValidationResult(errors)


def validate_assigned_user(users: UserLookup, user_id: object) -> ValidationResult:
    if not user_id:
        return ValidationResult()
    # A non-string id cannot name a user.
    if not isinstance(user_id, str) or not users.exists(user_id):
        return ValidationResult(["Assigned user not found"])
    return ValidationResult()


def validate_dependencies(
    tasks: TaskLookup, dependency_ids: object, *, task_id: str | None = None
) -> ValidationResult:
    """
    Every dependency must name an existing task.

    dependency_ids must be a list of string ids; a non-string entry is
    reported as a missing task. When task_id is given (updates), a task
    listing itself is rejected too.
    """
    if not isinstance(dependency_ids, (list, tuple)):
        return ValidationResult([DEPENDENCIES_ERROR])

    errors: list[str] = []
    self_ref = False
    for dep_id in dependency_ids:
        if task_id is not None and dep_id == task_id:
            self_ref = True
            continue
        if not isinstance(dep_id, str) or not tasks.exists(dep_id):
            errors.append(f"Dependency task with ID {dep_id} not found")
    if self_ref:
        errors.append("Task cannot depend on itself")
    return ValidationResult(errors)


def validate_new_user(users: UserLookup, username: object, email: object) -> ValidationResult:
    errors: list[str] = []

    if _blank(username):
        errors.append("Username is required")
    if _blank(email):
        errors.append("Email is required")

    if not _blank(username) and users.username_exists(str(username)):
        errors.append("Username already exists")
    if not _blank(email) and users.email_exists(str(email)):
        errors.append("Email already exists")

    return ValidationResult(errors)
