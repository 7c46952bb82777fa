# src/task_tracker/tasks/task_graph.py

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from ..core.errors import (
    AlreadyDoneError,
    DependenciesUnmetError,
    NotFoundError,
    ReferentialIntegrityError,
)
from ..store.entity_store import EntityStore
from .task_models import Priority, Task, TaskStatus, TaskUpdate

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


class TaskGraph:
    """
    In-memory task collection plus the dependency rules.

    Rules:
    - a task is completable when every dependency id resolves to a task in
      status Done (a missing target counts as unmet)
    - a task cannot be deleted while another task depends on it
    - mark_complete refuses Done tasks and tasks with unmet dependencies

    create()/update() do not check field legality or that referenced
    users/tasks exist: the validation layer runs before them.
    """

    def __init__(self, store: EntityStore[Task] | None = None) -> None:
        self._store: EntityStore[Task] = store if store is not None else EntityStore()
        logger.info("TaskGraph ready total=%s", self._store.count())

    # ---- CRUD ----

    def create(
        self,
        title: str,
        description: str,
        priority: Priority,
        status: TaskStatus,
        assigned_to: str | None = None,
        dependencies: Iterable[str] | None = None,
    ) -> Task:
        now = _now()
        task = Task(
            id=uuid.uuid4().hex,
            title=title.strip(),
            description=description.strip(),
            priority=Priority(priority),
            status=TaskStatus(status),
            created_at=now,
            updated_at=now,
            assigned_to=assigned_to or None,
            dependencies=list(dependencies or []),
        )
        self._store.insert(task)
        logger.debug(
            "Task added id=%s status=%s deps=%d", task.id, task.status.value, len(task.dependencies)
        )
        return task

    def get(self, task_id: str) -> Task | None:
        return self._store.get(task_id)

    def exists(self, task_id: str) -> bool:
        return task_id in self._store

    def list(self) -> list[Task]:
        return self._store.list()

    def count(self) -> int:
        return self._store.count()

    def update(self, task_id: str, changes: TaskUpdate, *, guard_done: bool = True) -> Task | None:
        """
        Apply the provided fields only and refresh updated_at.

        With guard_done, moving a task into Done through a plain update is held
        to the same dependency rule as mark_complete (checked against the
        dependency list the task will have after this update).
        Returns None if the task does not exist.
        """
        task = self._store.get(task_id)
        if task is None:
            return None

        if guard_done and changes.status == TaskStatus.DONE and not task.is_done:
            deps = changes.dependencies if changes.dependencies is not None else task.dependencies
            unmet = self._unmet(deps)
            if unmet:
                raise DependenciesUnmetError(task_id, unmet)

        if changes.title is not None:
            task.title = changes.title.strip()
        if changes.description is not None:
            task.description = changes.description.strip()
        if changes.priority is not None:
            task.priority = Priority(changes.priority)
        if changes.status is not None:
            task.status = TaskStatus(changes.status)
        if changes.assigned_to is not None:
            task.assigned_to = changes.assigned_to.value or None
        if changes.dependencies is not None:
            task.dependencies = list(changes.dependencies)

        task.updated_at = _now()
        logger.debug("Task updated id=%s status=%s", task.id, task.status.value)
        return task

    def delete(self, task_id: str) -> bool:
        """
        Remove a task nobody depends on.

        Raises ReferentialIntegrityError if the task is still a dependency of
        another task; returns False if the id is unknown.
        """
        if task_id not in self._store:
            return False
        dependents = self.dependents_of(task_id)
        if dependents:
            raise ReferentialIntegrityError(task_id, [t.id for t in dependents])
        removed = self._store.remove(task_id)
        logger.debug("Task deleted id=%s", task_id)
        return removed

    # ---- dependency rules ----

    def _unmet(self, dependencies: Iterable[str]) -> list[str]:
        out: list[str] = []
        for dep_id in dependencies:
            dep = self._store.get(dep_id)
            if dep is None or not dep.is_done:
                out.append(dep_id)
        return out

    def unmet_dependencies(self, task_id: str) -> list[str]:
        task = self._store.get(task_id)
        if task is None:
            return []
        return self._unmet(task.dependencies)

    def can_complete(self, task_id: str) -> bool:
        task = self._store.get(task_id)
        if task is None:
            return False
        return not self._unmet(task.dependencies)

    def mark_complete(self, task_id: str) -> Task:
        task = self._store.get(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        if task.is_done:
            raise AlreadyDoneError(task_id)

        unmet = self._unmet(task.dependencies)
        if unmet:
            raise DependenciesUnmetError(task_id, unmet)

        task.status = TaskStatus.DONE
        task.updated_at = _now()
        logger.debug("Task completed id=%s", task_id)
        return task

    def dependents_of(self, task_id: str) -> list[Task]:
        return [t for t in self._store.list() if task_id in t.dependencies]

    def is_dependency_for_others(self, task_id: str) -> bool:
        return any(task_id in t.dependencies for t in self._store.list())

    # ---- queries ----

    def list_blocked(self) -> list[Task]:
        """Tasks not yet Done whose completion is currently prevented by a dependency."""
        return [t for t in self._store.list() if not t.is_done and not self.can_complete(t.id)]

    def list_with_open_dependencies(self) -> list[Task]:
        """
        Tasks not yet Done that list at least one dependency, satisfied or not.

        This is the looser "blocked" view of the task board; use list_blocked()
        to ask whether a task can actually be completed right now.
        """
        return [t for t in self._store.list() if not t.is_done and t.dependencies]

    def find_by_user(self, user_id: str) -> list[Task]:
        return [t for t in self._store.list() if t.assigned_to == user_id]

    def find_by_status(self, status: TaskStatus | str) -> list[Task]:
        return [t for t in self._store.list() if t.status == status]

    def find_by_priority(self, priority: Priority | str) -> list[Task]:
        return [t for t in self._store.list() if t.priority == priority]

    def filter(
        self,
        *,
        priority: Priority | str | None = None,
        status: TaskStatus | str | None = None,
        assigned_to: str | None = None,
    ) -> list[Task]:
        """Combine the three filters; empty/None arguments are ignored."""
        tasks = self._store.list()
        if priority:
            tasks = [t for t in tasks if t.priority == priority]
        if status:
            tasks = [t for t in tasks if t.status == status]
        if assigned_to:
            tasks = [t for t in tasks if t.assigned_to == assigned_to]
        return tasks
