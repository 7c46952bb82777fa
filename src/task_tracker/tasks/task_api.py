# src/task_tracker/tasks/task_api.py

"""
Task operations as the outside world sees them.

Each helper validates first and commits second, both under state.lock, and
raises a TaskTrackerError subclass on rejection. Nothing here logs errors;
the boundary (envelope / console) does.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..core.errors import NotFoundError
from ..core.state import AppState
from ..validation import (
    validate_assigned_user,
    validate_dependencies,
    validate_task_fields,
)
from .task_models import Priority, Task, TaskStatus, TaskUpdate

logger = logging.getLogger(__name__)


def _require_task(state: AppState, task_id: str) -> Task:
    task = state.tasks.get(task_id)
    if task is None:
        raise NotFoundError("Task", task_id)
    return task


def create_task(
    state: AppState,
    *,
    title: Any,
    description: Any,
    priority: Any,
    status: Any,
    assigned_to: str | None = None,
    dependencies: Iterable[str] | None = None,
) -> Task:
    deps = dependencies if dependencies is not None else []
    with state.lock:
        # Each group is reported on its own, in this order.
        validate_task_fields(title, description, priority, status).raise_if_invalid()
        validate_assigned_user(state.users, assigned_to).raise_if_invalid()
        if deps:
            validate_dependencies(state.tasks, deps).raise_if_invalid()

        task = state.tasks.create(
            title,
            description,
            Priority(priority),
            TaskStatus(status),
            assigned_to=assigned_to or None,
            dependencies=list(deps),
        )
    logger.info("Task created id=%s title=%r", task.id, task.title)
    return task


def create_task_from_payload(state: AppState, payload: dict[str, Any]) -> Task:
    return create_task(
        state,
        title=payload.get("title"),
        description=payload.get("description"),
        priority=payload.get("priority"),
        status=payload.get("status"),
        assigned_to=payload.get("assignedTo") or None,
        dependencies=payload.get("dependencies") or [],
    )


def get_task(state: AppState, task_id: str) -> Task:
    with state.lock:
        return _require_task(state, task_id)


def list_tasks(
    state: AppState,
    *,
    priority: str | None = None,
    status: str | None = None,
    assigned_to: str | None = None,
) -> list[Task]:
    with state.lock:
        return state.tasks.filter(priority=priority, status=status, assigned_to=assigned_to)


def list_user_tasks(state: AppState, user_id: str) -> list[Task]:
    with state.lock:
        if not state.users.exists(user_id):
            raise NotFoundError("User", user_id)
        return state.tasks.find_by_user(user_id)


def list_blocked_tasks(state: AppState) -> list[Task]:
    with state.lock:
        return state.tasks.list_blocked()


def list_tasks_with_open_dependencies(state: AppState) -> list[Task]:
    with state.lock:
        return state.tasks.list_with_open_dependencies()


def _check_fields(
    task: Task, title: Any, description: Any, priority: Any, status: Any
) -> None:
    # Only when at least one of the four is provided: validate the merged view.
    if all(v is None for v in (title, description, priority, status)):
        return
    validate_task_fields(
        task.title if title is None else title,
        task.description if description is None else description,
        task.priority if priority is None else priority,
        task.status if status is None else status,
    ).raise_if_invalid()


def _apply_update(state: AppState, task: Task, changes: TaskUpdate) -> Task:
    if changes.assigned_to is not None:
        validate_assigned_user(state.users, changes.assigned_to.value).raise_if_invalid()
    if changes.dependencies is not None:
        validate_dependencies(
            state.tasks, changes.dependencies, task_id=task.id
        ).raise_if_invalid()

    updated = state.tasks.update(task.id, changes, guard_done=state.guard_done_on_update)
    if updated is None:
        raise NotFoundError("Task", task.id)
    logger.info("Task updated id=%s", updated.id)
    return updated


def update_task(state: AppState, task_id: str, changes: TaskUpdate) -> Task:
    with state.lock:
        task = _require_task(state, task_id)
        _check_fields(task, changes.title, changes.description, changes.priority, changes.status)
        return _apply_update(state, task, changes)


def update_task_from_payload(state: AppState, task_id: str, payload: dict[str, Any]) -> Task:
    """
    Update from a camelCase client payload.

    Raw priority/status strings and the raw dependency list are validated
    before TaskUpdate.from_payload converts them, so a malformed value
    surfaces as a ValidationError.
    """
    with state.lock:
        task = _require_task(state, task_id)
        _check_fields(
            task,
            payload.get("title"),
            payload.get("description"),
            payload.get("priority"),
            payload.get("status"),
        )
        if payload.get("dependencies") is not None:
            validate_dependencies(
                state.tasks, payload["dependencies"], task_id=task.id
            ).raise_if_invalid()
        return _apply_update(state, task, TaskUpdate.from_payload(payload))


def complete_task(state: AppState, task_id: str) -> Task:
    with state.lock:
        task = state.tasks.mark_complete(task_id)
    logger.info("Task completed id=%s", task.id)
    return task


def delete_task(state: AppState, task_id: str) -> None:
    with state.lock:
        _require_task(state, task_id)
        state.tasks.delete(task_id)
    logger.info("Task deleted id=%s", task_id)


def health_summary(state: AppState) -> dict[str, int]:
    with state.lock:
        return {"users": state.users.count(), "tasks": state.tasks.count()}
