from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Any, Callable, Generic, Optional, TypeVar

from ..core.exceptions import ConflictError, NotFoundError
from .kind import EntityKind
from .store import EntityStore

T = TypeVar("T")
D = TypeVar("D")

logger = logging.getLogger(__name__)


class LifecycleManager(Generic[T, D]):
    """Writes for one entity kind: create, full-replace update, delete.

    Every write runs its uniqueness check and the write itself inside one
    store transaction.
    """

    def __init__(self, kind: EntityKind[T, D], store: EntityStore[T]):
        self._kind = kind
        self._store = store

    def create(self, draft: D) -> T:
        self._kind.validate(draft, self.today())
        with self._store.transaction():
            # The sequence row lock orders concurrent creates before the unique lookup.
            entity_id = self._store.next_id()
            self._ensure_unique(draft, exclude_id=None)
            now = self._store.now() if self._kind.timestamped else None
            entity = self._kind.build(draft, entity_id=entity_id, created_at=now, updated_at=now)
            self._store.insert(entity)

        logger.info("%s %s created", self._kind.name, entity_id, extra={"entity": self._kind.name, "entity_id": entity_id})
        return entity

    def update(self, entity_id: int, draft: D) -> T:
        self._kind.validate(draft, self.today())
        with self._store.transaction():
            existing = self.require(entity_id)
            self._ensure_unique(draft, exclude_id=entity_id)
            if self._kind.timestamped:
                created_at: Optional[datetime] = getattr(existing, "created_at")
                updated_at: Optional[datetime] = self._next_timestamp(existing)
            else:
                created_at = updated_at = None
            entity = self._kind.build(draft, entity_id=entity_id, created_at=created_at, updated_at=updated_at)
            self._store.replace(entity)

        logger.info("%s %s updated", self._kind.name, entity_id, extra={"entity": self._kind.name, "entity_id": entity_id})
        return entity

    def delete(self, entity_id: int) -> None:
        with self._store.transaction():
            self.require(entity_id)
            self._store.delete_by_id(entity_id)

        logger.info("%s %s deleted", self._kind.name, entity_id, extra={"entity": self._kind.name, "entity_id": entity_id})

    def transition(self, entity_id: int, change: Callable[[T], T]) -> T:
        """Apply ``change`` to the stored entity and persist the result."""
        with self._store.transaction():
            existing = self.require(entity_id)
            entity = change(existing)
            if self._kind.timestamped:
                entity = replace(entity, updated_at=self._next_timestamp(existing))
            self._store.replace(entity)
        return entity

    def require(self, entity_id: int) -> T:
        entity = self._store.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self._kind.name} not found: id={entity_id}")
        return entity

    def today(self) -> date:
        return self._store.now().date()

    def _ensure_unique(self, draft: D, *, exclude_id: Optional[int]) -> None:
        for key in self._kind.unique_keys:
            value: Any = key.value_of(draft)
            if value is None:
                continue
            holder = self._store.find_one(key.field, value)
            if holder is not None and self._kind.identity(holder) != exclude_id:
                logger.warning("%s conflict on %s=%s", self._kind.name, key.field, value, extra={"entity": self._kind.name})
                raise ConflictError(f"{key.label} already exists: {value}")

    def _next_timestamp(self, existing: T) -> datetime:
        now = self._store.now()
        previous: Optional[datetime] = getattr(existing, "updated_at", None)
        # updated_at must strictly increase even when the clock has not moved.
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now
