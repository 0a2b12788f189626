from __future__ import annotations

from datetime import datetime
from typing import Any, ContextManager, Optional, Protocol, Sequence, TypeVar

from .filters import Predicate

T = TypeVar("T")


class EntityStore(Protocol[T]):
    """Storage capability for one entity kind.

    Note (DIP): the engine depends on this interface only. Identity and time
    come from the store so tests can run on a fake clock.
    """

    def transaction(self) -> ContextManager[None]:
        """Boundary for a check-then-write sequence (re-entrant)."""

        raise NotImplementedError

    def next_id(self) -> int:
        raise NotImplementedError

    def now(self) -> datetime:
        raise NotImplementedError

    def list_all(self) -> Sequence[T]:
        raise NotImplementedError

    def get_by_id(self, entity_id: int) -> Optional[T]:
        raise NotImplementedError

    def find_one(self, field: str, value: Any) -> Optional[T]:
        raise NotImplementedError

    def select(self, predicates: Sequence[Predicate]) -> Sequence[T]:
        raise NotImplementedError

    def insert(self, entity: T) -> None:
        raise NotImplementedError

    def replace(self, entity: T) -> None:
        raise NotImplementedError

    def delete_by_id(self, entity_id: int) -> bool:
        raise NotImplementedError
