# src/task_tracker/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..tasks.task_graph import TaskGraph
from ..users.user_directory import UserDirectory


@dataclass
class AppState:
    """
    Everything one running app needs, built once by the composition root.

    `lock` serializes operations: a validate-then-commit sequence (for example
    "check dependencies, then set Done") must not interleave with a delete or
    update from another thread.
    """

    # Settings (or any object with the same attributes, e.g. in tests).
    settings: object

    users: UserDirectory
    tasks: TaskGraph

    lock: threading.RLock = field(default_factory=threading.RLock)

    @property
    def guard_done_on_update(self) -> bool:
        return bool(getattr(self.settings, "guard_done_on_update", True))
