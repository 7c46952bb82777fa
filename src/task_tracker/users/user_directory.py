# src/task_tracker/users/user_directory.py

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime

from ..store.entity_store import EntityStore
from .user_models import User, normalize_email

logger = logging.getLogger(__name__)


class UserDirectory:
    """
    In-memory user directory.

    Uniqueness rules:
    - username: exact, case-sensitive match
    - email: compared after trim + lowercase on both sides

    create() does not check them; run validate_new_user() first.
    """

    def __init__(self, store: EntityStore[User] | None = None) -> None:
        self._store: EntityStore[User] = store if store is not None else EntityStore()
        logger.info("UserDirectory ready total=%s", self._store.count())

    def create(self, username: str, email: str) -> User:
        user = User(
            id=uuid.uuid4().hex,
            username=username,
            email=email,
            created_at=datetime.now(UTC),
        )
        self._store.insert(user)
        logger.debug("User added id=%s username=%s", user.id, user.username)
        return user

    def get(self, user_id: str) -> User | None:
        return self._store.get(user_id)

    def exists(self, user_id: str | None) -> bool:
        return bool(user_id) and user_id in self._store

    def list(self) -> list[User]:
        return self._store.list()

    def count(self) -> int:
        return self._store.count()

    def find_by_username(self, username: str | None) -> User | None:
        if username is None:
            return None
        for user in self._store.list():
            if user.username == username:
                return user
        return None

    def find_by_email(self, email: str | None) -> User | None:
        lookup = normalize_email(email)
        if not lookup:
            return None
        for user in self._store.list():
            if normalize_email(user.email) == lookup:
                return user
        return None

    def username_exists(self, username: str | None) -> bool:
        return self.find_by_username(username) is not None

    def email_exists(self, email: str | None) -> bool:
        return self.find_by_email(email) is not None
