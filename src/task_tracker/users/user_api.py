# src/task_tracker/users/user_api.py

from __future__ import annotations

import logging
from typing import Any

from ..core.errors import NotFoundError
from ..core.state import AppState
from ..validation import validate_new_user
from .user_models import User

logger = logging.getLogger(__name__)


def create_user(state: AppState, *, username: Any, email: Any) -> User:
    with state.lock:
        validate_new_user(state.users, username, email).raise_if_invalid()
        user = state.users.create(str(username), str(email))
    logger.info("User created id=%s username=%s", user.id, user.username)
    return user


def get_user(state: AppState, user_id: str) -> User:
    with state.lock:
        user = state.users.get(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def list_users(state: AppState) -> list[User]:
    with state.lock:
        return state.users.list()


def find_user_by_username(state: AppState, username: str) -> User:
    """
    Username lookup used by the task board to pick the "current user".

    There is no password or session: this is a lookup, not authentication.
    """
    with state.lock:
        user = state.users.find_by_username(username)
    if user is None:
        raise NotFoundError("User", username)
    return user
