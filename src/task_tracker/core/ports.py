# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the validation layer and the operation layer.

Validation only needs existence lookups, so it depends on these Protocols
instead of the concrete UserDirectory / TaskGraph. Tests can pass tiny fakes.
"""

from typing import Any, Protocol


class UserLookup(Protocol):
    def exists(self, user_id: str | None) -> bool: ...
    def username_exists(self, username: str | None) -> bool: ...
    def email_exists(self, email: str | None) -> bool: ...


class TaskLookup(Protocol):
    def exists(self, task_id: str) -> bool: ...


class Serializable(Protocol):
    """Entities that can be rendered into the response envelope."""

    def to_dict(self) -> dict[str, Any]: ...
