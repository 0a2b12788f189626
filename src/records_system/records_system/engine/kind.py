"""Capability description of one entity kind.

The shared filter/aggregate/lifecycle code knows nothing about users, sales
or employees; each feature module hands it an EntityKind instead.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from ..core.exceptions import ValidationError
from .aggregator import Dimension
from .filters import Criterion

T = TypeVar("T")
D = TypeVar("D")


@dataclass(frozen=True)
class UniqueKey:
    field: str
    label: str
    # Optional keys (Employee.email) are only unique when filled in.
    skip_blank: bool = False

    def value_of(self, obj: Any) -> Optional[Any]:
        value = getattr(obj, self.field, None)
        if value is None or (self.skip_blank and value == ""):
            return None
        return value


@dataclass(frozen=True)
class EntityKind(Generic[T, D]):
    name: str
    id_field: str
    materialize: Callable[..., T]
    validate: Callable[[D, date], None]
    unique_keys: tuple[UniqueKey, ...] = ()
    criteria: Mapping[str, Criterion] = field(default_factory=dict)
    search_criterion: Optional[str] = None
    dimensions: Mapping[str, Dimension] = field(default_factory=dict)
    recent_key: Optional[Callable[[T], Any]] = None
    timestamped: bool = True

    def identity(self, entity: T) -> int:
        return int(getattr(entity, self.id_field))

    def build(
        self,
        draft: D,
        *,
        entity_id: int,
        created_at: Optional[datetime],
        updated_at: Optional[datetime],
    ) -> T:
        return self.materialize(draft, entity_id=entity_id, created_at=created_at, updated_at=updated_at)

    def dimension(self, name: str) -> Dimension:
        try:
            return self.dimensions[name]
        except KeyError:
            raise ValidationError(f"Unknown {self.name} dimension: {name}") from None

    def unique_key(self, field_name: str) -> UniqueKey:
        for key in self.unique_keys:
            if key.field == field_name:
                return key
        raise ValidationError(f"{field_name} is not a unique key of {self.name}")
