# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class FakeUsers:
    """
    UserLookup backed by plain sets, for validation tests.

    email lookups are case/whitespace-insensitive like the real directory.
    """

    ids: set[str] = field(default_factory=set)
    usernames: set[str] = field(default_factory=set)
    emails: set[str] = field(default_factory=set)

    def exists(self, user_id: str | None) -> bool:
        return user_id in self.ids

    def username_exists(self, username: str | None) -> bool:
        return username in self.usernames

    def email_exists(self, email: str | None) -> bool:
        return (email or "").strip().lower() in {e.strip().lower() for e in self.emails}


@dataclass(slots=True)
class FakeTasks:
    ids: set[str] = field(default_factory=set)

    def exists(self, task_id: str) -> bool:
        return task_id in self.ids
