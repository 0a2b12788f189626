"""Filter engine: optional criteria compiled into a single query.

A criterion left as ``None`` imposes no constraint. Every supplied criterion
becomes a Predicate; a row matches when all predicates hold. Stores evaluate
the predicate list natively (in Python or as one SQL WHERE clause).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Sequence, TypeVar

from ..core.exceptions import ValidationError

T = TypeVar("T")


class Op(str, Enum):
    CONTAINS = "contains"
    EQUALS = "eq"
    AT_LEAST = "gte"
    AT_MOST = "lte"


@dataclass(frozen=True)
class Predicate:
    field: str
    op: Op
    value: Any

    def matches(self, entity: Any) -> bool:
        actual = getattr(entity, self.field)
        if actual is None:
            return False
        if self.op is Op.CONTAINS:
            return str(self.value).lower() in str(actual).lower()
        if self.op is Op.EQUALS:
            return actual == self.value
        if self.op is Op.AT_LEAST:
            return actual >= self.value
        return actual <= self.value


@dataclass(frozen=True)
class Criterion:
    """A named optional filter parameter bound to one entity field."""

    field: str
    op: Op

    def bind(self, value: Any) -> Predicate:
        return Predicate(field=self.field, op=self.op, value=value)


def contains(field: str) -> Criterion:
    return Criterion(field, Op.CONTAINS)


def equals(field: str) -> Criterion:
    return Criterion(field, Op.EQUALS)


def at_least(field: str) -> Criterion:
    return Criterion(field, Op.AT_LEAST)


def at_most(field: str) -> Criterion:
    return Criterion(field, Op.AT_MOST)


def build_query(criteria: Mapping[str, Criterion], supplied: Mapping[str, Any]) -> list[Predicate]:
    unknown = sorted(set(supplied) - set(criteria))
    if unknown:
        raise ValidationError(f"Unknown filter criteria: {', '.join(unknown)}")
    return [criteria[name].bind(value) for name, value in supplied.items() if value is not None]


def apply_query(items: Iterable[T], predicates: Sequence[Predicate]) -> list[T]:
    return [item for item in items if all(p.matches(item) for p in predicates)]


def top_by(items: Iterable[T], key: Callable[[T], Any], limit: int) -> list[T]:
    """Largest ``key`` first, truncated to ``limit``. Ties keep store order."""
    if limit <= 0:
        return []
    ordered = sorted(items, key=lambda item: (key(item) is not None, key(item)), reverse=True)
    return ordered[:limit]
