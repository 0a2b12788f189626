from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.validators import (
    require_email,
    require_max_length,
    require_non_empty,
    require_range,
)
from ..core.constants import AGE_MAX, AGE_MIN, EMAIL_MAX, GENDER_MAX, PHONE_MAX, USER_NAME_MAX


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access.
    """

    user_id: int
    name: str
    email: str
    phone: Optional[str]
    age: Optional[int]
    gender: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class NewUser:
    """Client-supplied values for create and full-replace update."""

    name: str
    email: str
    phone: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None


def validate_user(draft: NewUser, today: date) -> None:
    require_non_empty(draft.name, "name")
    require_max_length(draft.name, "name", USER_NAME_MAX)
    require_non_empty(draft.email, "email")
    require_max_length(draft.email, "email", EMAIL_MAX)
    require_email(draft.email, "email")
    require_max_length(draft.phone, "phone", PHONE_MAX)
    require_range(draft.age, "age", minimum=AGE_MIN, maximum=AGE_MAX)
    require_max_length(draft.gender, "gender", GENDER_MAX)


def materialize_user(
    draft: NewUser,
    *,
    entity_id: int,
    created_at: Optional[datetime],
    updated_at: Optional[datetime],
) -> User:
    return User(
        user_id=int(entity_id),
        name=draft.name,
        email=draft.email,
        phone=draft.phone,
        age=draft.age,
        gender=draft.gender,
        created_at=created_at,
        updated_at=updated_at,
    )
