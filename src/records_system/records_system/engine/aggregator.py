from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Hashable, Iterable, NamedTuple, Optional, Sequence, TypeVar

T = TypeVar("T")


class GroupCount(NamedTuple):
    key: Any
    count: int


class GroupTotal(NamedTuple):
    key: Any
    total: int


@dataclass(frozen=True)
class NumericSummary:
    count: int
    total: int
    average: float
    maximum: int
    minimum: int


def age_bucket(age: int) -> str:
    if age < 20:
        return "teens"
    if age < 30:
        return "20s"
    if age < 40:
        return "30s"
    if age < 50:
        return "40s"
    if age < 60:
        return "50s"
    return "60s+"


def tenure_bucket(hire_date: date, today: date) -> str:
    # Calendar-year difference: hired 2025-12-31 counts as 1 year on 2026-01-01.
    years = today.year - hire_date.year
    if years < 1:
        return "under 1y"
    if years < 3:
        return "1-3y"
    if years < 5:
        return "3-5y"
    if years < 10:
        return "5-10y"
    return "10y+"


class BucketPolicy(ABC):
    """Strategy: classify a continuous value into a named range."""

    @abstractmethod
    def classify(self, value: Any, *, today: date) -> str:
        raise NotImplementedError


class AgeBucketPolicy(BucketPolicy):
    def classify(self, value: Any, *, today: date) -> str:
        return age_bucket(int(value))


class TenureBucketPolicy(BucketPolicy):
    def classify(self, value: Any, *, today: date) -> str:
        return tenure_bucket(value, today)


@dataclass(frozen=True)
class Dimension:
    """A grouping axis: an entity field, optionally bucketed and scoped."""

    name: str
    field: str
    bucket: Optional[BucketPolicy] = None
    scope: Optional[Callable[[Any], bool]] = None

    def select(self, items: Iterable[T]) -> list[T]:
        if self.scope is None:
            return list(items)
        return [item for item in items if self.scope(item)]

    def key_function(self, *, today: date) -> Callable[[Any], Optional[Hashable]]:
        def key(entity: Any) -> Optional[Hashable]:
            value = getattr(entity, self.field)
            if value is None:
                return None
            if self.bucket is not None:
                return self.bucket.classify(value, today=today)
            if isinstance(value, Enum):
                return value.value
            return value

        return key


def group_counts(items: Iterable[T], key: Callable[[T], Optional[Hashable]]) -> list[GroupCount]:
    """Count rows per key, largest group first. Rows with a null key are skipped."""
    counts: dict[Hashable, int] = {}
    for item in items:
        k = key(item)
        if k is None:
            continue
        counts[k] = counts.get(k, 0) + 1
    ordered = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [GroupCount(k, c) for k, c in ordered]


def group_totals(
    items: Iterable[T],
    key: Callable[[T], Optional[Hashable]],
    value: Callable[[T], int],
) -> list[GroupTotal]:
    totals: dict[Hashable, int] = {}
    for item in items:
        k = key(item)
        if k is None:
            continue
        totals[k] = totals.get(k, 0) + int(value(item))
    ordered = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [GroupTotal(k, t) for k, t in ordered]


def summarize(values: Iterable[Optional[int]]) -> NumericSummary:
    present: Sequence[int] = [v for v in values if v is not None]
    if not present:
        return NumericSummary(count=0, total=0, average=0.0, maximum=0, minimum=0)
    total = sum(present)
    return NumericSummary(
        count=len(present),
        total=total,
        average=total / len(present),
        maximum=max(present),
        minimum=min(present),
    )


def average(values: Iterable[Optional[int]]) -> float:
    return summarize(values).average


def count_where(items: Iterable[T], predicate: Callable[[T], bool]) -> int:
    return sum(1 for item in items if predicate(item))
