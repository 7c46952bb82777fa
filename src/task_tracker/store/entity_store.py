# src/task_tracker/store/entity_store.py

from __future__ import annotations

from typing import Generic, Protocol, TypeVar


class HasId(Protocol):
    @property
    def id(self) -> str: ...


E = TypeVar("E", bound=HasId)


class EntityStore(Generic[E]):
    """
    In-memory keyed collection.

    - entities are keyed by their own `id`
    - list() returns a new list in insertion order (a snapshot, not a view)
    - get()/remove() on an unknown id never raise; callers interpret absence
    """

    def __init__(self) -> None:
        self._items: dict[str, E] = {}

    def insert(self, entity: E) -> str:
        self._items[entity.id] = entity
        return entity.id

    def get(self, entity_id: str) -> E | None:
        return self._items.get(entity_id)

    def list(self) -> list[E]:
        return list(self._items.values())

    def remove(self, entity_id: str) -> bool:
        if entity_id in self._items:
            del self._items[entity_id]
            return True
        return False

    def count(self) -> int:
        return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    def __len__(self) -> int:
        return len(self._items)
