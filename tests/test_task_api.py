# tests/test_task_api.py

from __future__ import annotations

import pytest

from task_tracker.core.errors import (
    AlreadyDoneError,
    DependenciesUnmetError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from task_tracker.core.state import AppState
from task_tracker.tasks import task_api
from task_tracker.tasks.task_models import Change, Priority, TaskStatus, TaskUpdate
from task_tracker.users import user_api


def _add(state: AppState, title: str, **kw):
    return task_api.create_task(
        state,
        title=title,
        description=kw.pop("description", f"{title} description"),
        priority=kw.pop("priority", "Medium"),
        status=kw.pop("status", "To Do"),
        **kw,
    )


def test_create_task_validates_fields_before_storing(state: AppState) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _add(state, "", priority="Urgent")
    assert "Title is required" in exc_info.value.errors
    assert "Priority must be Low, Medium, or High" in exc_info.value.errors
    assert state.tasks.count() == 0


def test_create_task_checks_assignee_and_dependencies(state: AppState) -> None:
    with pytest.raises(ValidationError) as exc_info:
        _add(state, "t", assigned_to="ghost")
    assert exc_info.value.errors == ["Assigned user not found"]

    with pytest.raises(ValidationError) as exc_info:
        _add(state, "t", dependencies=["nope"])
    assert exc_info.value.errors == ["Dependency task with ID nope not found"]
    assert state.tasks.count() == 0

    alice = user_api.create_user(state, username="alice", email="a@x.com")
    dep = _add(state, "dep")
    t = _add(state, "t", assigned_to=alice.id, dependencies=[dep.id])
    assert t.assigned_to == alice.id
    assert t.dependencies == [dep.id]
    assert t.priority is Priority.MEDIUM
    assert t.status is TaskStatus.TODO


def test_create_from_payload(state: AppState) -> None:
    t = task_api.create_task_from_payload(
        state,
        {"title": " A ", "description": "d", "priority": "Low", "status": "In Progress",
         "assignedTo": ""},
    )
    assert t.title == "A"
    assert t.assigned_to is None
    assert t.status is TaskStatus.IN_PROGRESS


def test_blocked_scenario(state: AppState) -> None:
    a = _add(state, "A")
    b = _add(state, "B", dependencies=[a.id])

    assert not state.tasks.can_complete(b.id)
    assert [t.id for t in task_api.list_blocked_tasks(state)] == [b.id]
    with pytest.raises(DependenciesUnmetError):
        task_api.complete_task(state, b.id)

    task_api.complete_task(state, a.id)
    assert state.tasks.can_complete(b.id)
    assert task_api.list_blocked_tasks(state) == []
    # The looser view still lists B: it is open and has a dependency.
    assert [t.id for t in task_api.list_tasks_with_open_dependencies(state)] == [b.id]

    task_api.complete_task(state, b.id)
    with pytest.raises(AlreadyDoneError):
        task_api.complete_task(state, b.id)


def test_complete_unknown_task(state: AppState) -> None:
    with pytest.raises(NotFoundError):
        task_api.complete_task(state, "nope")


def test_delete_scenario(state: AppState) -> None:
    x = _add(state, "X")
    y = _add(state, "Y", dependencies=[x.id])

    with pytest.raises(ReferentialIntegrityError):
        task_api.delete_task(state, x.id)
    task_api.delete_task(state, y.id)
    task_api.delete_task(state, x.id)
    assert state.tasks.count() == 0

    with pytest.raises(NotFoundError):
        task_api.delete_task(state, x.id)


def test_update_validates_merged_fields(state: AppState) -> None:
    t = _add(state, "T")

    with pytest.raises(ValidationError) as exc_info:
        task_api.update_task_from_payload(state, t.id, {"title": "   "})
    assert exc_info.value.errors == ["Title is required"]

    with pytest.raises(ValidationError) as exc_info:
        task_api.update_task_from_payload(state, t.id, {"status": "Archived"})
    assert exc_info.value.errors == ["Status must be To Do, In Progress, or Done"]

    updated = task_api.update_task_from_payload(state, t.id, {"priority": "High"})
    assert updated.priority is Priority.HIGH
    assert updated.title == "T"


def test_update_assignee_omitted_vs_cleared(state: AppState) -> None:
    alice = user_api.create_user(state, username="alice", email="a@x.com")
    t = _add(state, "T", assigned_to=alice.id)

    task_api.update_task_from_payload(state, t.id, {"title": "T2"})
    assert t.assigned_to == alice.id

    task_api.update_task_from_payload(state, t.id, {"assignedTo": None})
    assert t.assigned_to is None

    with pytest.raises(ValidationError):
        task_api.update_task(state, t.id, TaskUpdate(assigned_to=Change("ghost")))

    task_api.update_task(state, t.id, TaskUpdate(assigned_to=Change(alice.id)))
    assert t.assigned_to == alice.id


def test_update_dependencies_rules(state: AppState) -> None:
    a = _add(state, "A")
    b = _add(state, "B")

    with pytest.raises(ValidationError) as exc_info:
        task_api.update_task_from_payload(state, b.id, {"dependencies": [b.id]})
    assert exc_info.value.errors == ["Task cannot depend on itself"]

    with pytest.raises(ValidationError):
        task_api.update_task_from_payload(state, b.id, {"dependencies": ["ghost"]})

    task_api.update_task_from_payload(state, b.id, {"dependencies": [a.id]})
    assert b.dependencies == [a.id]


def test_update_to_done_respects_guard_setting(state: AppState) -> None:
    a = _add(state, "A")
    b = _add(state, "B", dependencies=[a.id])

    with pytest.raises(DependenciesUnmetError):
        task_api.update_task_from_payload(state, b.id, {"status": "Done"})

    state.settings.guard_done_on_update = False
    task_api.update_task_from_payload(state, b.id, {"status": "Done"})
    assert b.status is TaskStatus.DONE


def test_update_unknown_task(state: AppState) -> None:
    with pytest.raises(NotFoundError):
        task_api.update_task_from_payload(state, "nope", {"title": "x"})


def test_list_filters_and_user_tasks(state: AppState) -> None:
    alice = user_api.create_user(state, username="alice", email="a@x.com")
    a = _add(state, "A", priority="High", assigned_to=alice.id)
    _add(state, "B", priority="Low")

    assert task_api.list_tasks(state, priority="High") == [a]
    assert task_api.list_tasks(state, assigned_to=alice.id) == [a]
    assert len(task_api.list_tasks(state)) == 2
    assert task_api.list_user_tasks(state, alice.id) == [a]

    with pytest.raises(NotFoundError) as exc_info:
        task_api.list_user_tasks(state, "ghost")
    assert str(exc_info.value) == "User not found"


def test_users_api(state: AppState) -> None:
    alice = user_api.create_user(state, username="alice", email="a@x.com")

    with pytest.raises(ValidationError) as exc_info:
        user_api.create_user(state, username="alice2", email="A@X.com ")
    assert exc_info.value.errors == ["Email already exists"]

    assert user_api.get_user(state, alice.id) == alice
    assert user_api.find_user_by_username(state, "alice") == alice
    assert user_api.list_users(state) == [alice]
    with pytest.raises(NotFoundError):
        user_api.get_user(state, "ghost")
    with pytest.raises(NotFoundError):
        user_api.find_user_by_username(state, "Alice")

    assert task_api.health_summary(state) == {"users": 1, "tasks": 0}
