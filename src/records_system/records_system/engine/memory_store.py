from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Generic, Iterator, Optional, Sequence, TypeVar

from ..common.datetime_utils import Clock, SystemClock
from .filters import Predicate, apply_query

T = TypeVar("T")


class InMemoryEntityStore(Generic[T]):
    """Process-local store: insertion-ordered rows guarded by one re-entrant lock."""

    def __init__(self, id_field: str, *, clock: Optional[Clock] = None, start_id: int = 1):
        self._id_field = id_field
        self._clock = clock or SystemClock()
        self._rows: dict[int, T] = {}
        self._next_id = int(start_id)
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            yield

    def next_id(self) -> int:
        with self._lock:
            value = self._next_id
            self._next_id += 1
            return value

    def now(self) -> datetime:
        return self._clock.now()

    def list_all(self) -> Sequence[T]:
        with self._lock:
            return list(self._rows.values())

    def get_by_id(self, entity_id: int) -> Optional[T]:
        with self._lock:
            return self._rows.get(int(entity_id))

    def find_one(self, field: str, value: Any) -> Optional[T]:
        with self._lock:
            for row in self._rows.values():
                if getattr(row, field) == value:
                    return row
            return None

    def select(self, predicates: Sequence[Predicate]) -> Sequence[T]:
        return apply_query(self.list_all(), predicates)

    def insert(self, entity: T) -> None:
        entity_id = int(getattr(entity, self._id_field))
        with self._lock:
            if entity_id in self._rows:
                raise ValueError(f"Duplicate id {entity_id}")
            self._rows[entity_id] = entity

    def replace(self, entity: T) -> None:
        entity_id = int(getattr(entity, self._id_field))
        with self._lock:
            if entity_id not in self._rows:
                raise KeyError(entity_id)
            # Re-assigning an existing key keeps its insertion position.
            self._rows[entity_id] = entity

    def delete_by_id(self, entity_id: int) -> bool:
        with self._lock:
            return self._rows.pop(int(entity_id), None) is not None
