# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from task_tracker.core.state import AppState
from task_tracker.tasks.task_graph import TaskGraph
from task_tracker.tasks.task_models import Priority, TaskStatus
from task_tracker.users.user_directory import UserDirectory


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="DEBUG",
        log_to_file=False,
        console_enabled=False,
        guard_done_on_update=True,
    )


@pytest.fixture()
def graph() -> TaskGraph:
    return TaskGraph()


@pytest.fixture()
def users() -> UserDirectory:
    return UserDirectory()


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """Fresh stores per test: nothing leaks between tests."""
    return AppState(settings=settings, users=UserDirectory(), tasks=TaskGraph())


@pytest.fixture()
def make_task(graph: TaskGraph):
    """Create a task in `graph` with sensible defaults."""

    def _make(title: str = "task", *, status: TaskStatus = TaskStatus.TODO, deps=None, **kw):
        return graph.create(
            title,
            kw.pop("description", f"{title} description"),
            kw.pop("priority", Priority.MEDIUM),
            status,
            dependencies=deps,
            **kw,
        )

    return _make
