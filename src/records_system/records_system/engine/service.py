from __future__ import annotations

from datetime import date
from typing import Any, Generic, Mapping, Optional, TypeVar

from ..core.exceptions import NotFoundError, ValidationError
from .aggregator import GroupCount, group_counts
from .filters import build_query, top_by
from .kind import EntityKind
from .lifecycle import LifecycleManager
from .store import EntityStore

T = TypeVar("T")
D = TypeVar("D")


class RecordService(Generic[T, D]):
    """Shared CRUD/query surface; feature services add their own shortcuts."""

    def __init__(
        self,
        kind: EntityKind[T, D],
        store: EntityStore[T],
        *,
        lifecycle: Optional[LifecycleManager[T, D]] = None,
    ):
        self._kind = kind
        self._store = store
        self._lifecycle = lifecycle or LifecycleManager(kind, store)

    def list_all(self) -> list[T]:
        return list(self._store.list_all())

    def get(self, entity_id: int) -> T:
        entity = self._store.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self._kind.name} not found: id={entity_id}")
        return entity

    def get_by(self, field: str, value: Any) -> T:
        key = self._kind.unique_key(field)
        entity = self._store.find_one(key.field, value)
        if entity is None:
            raise NotFoundError(f"{self._kind.name} not found: {field}={value}")
        return entity

    def create(self, draft: D) -> T:
        return self._lifecycle.create(draft)

    def update(self, entity_id: int, draft: D) -> T:
        return self._lifecycle.update(entity_id, draft)

    def delete(self, entity_id: int) -> None:
        self._lifecycle.delete(entity_id)

    def search(self, text: Optional[str]) -> list[T]:
        if self._kind.search_criterion is None:
            raise ValidationError(f"{self._kind.name} does not support search")
        return self.filter({self._kind.search_criterion: text})

    def filter(self, criteria: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> list[T]:
        supplied = dict(criteria or {})
        supplied.update(kwargs)
        predicates = build_query(self._kind.criteria, supplied)
        if not predicates:
            return self.list_all()
        return list(self._store.select(predicates))

    def recent(self, limit: int) -> list[T]:
        if self._kind.recent_key is None:
            raise ValidationError(f"{self._kind.name} has no recency order")
        return top_by(self.list_all(), self._kind.recent_key, int(limit))

    def group_counts(self, dimension: str) -> list[GroupCount]:
        dim = self._kind.dimension(dimension)
        return group_counts(dim.select(self.list_all()), dim.key_function(today=self.today()))

    def today(self) -> date:
        return self._lifecycle.today()
