from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from email_validator import EmailNotValidError, validate_email

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value


def require_present(value: Any, field_name: str) -> Any:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    return value


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> Optional[str]:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_range(
    value: Optional[int],
    field_name: str,
    *,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if minimum is not None and value < minimum:
        raise ValidationError(f"{field_name} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{field_name} must be <= {maximum}")
    return value


def require_email(value: Optional[str], field_name: str) -> Optional[str]:
    if not value:
        return value
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError(f"{field_name} is not a valid email address: {exc}") from None
    return value


def require_not_future(value: Optional[date], field_name: str, *, today: date) -> Optional[date]:
    if value is None:
        return None
    if not isinstance(value, date):
        raise ValidationError(f"{field_name} must be a date")
    if value > today:
        raise ValidationError(f"{field_name} cannot be in the future")
    return value


def require_one_of(value: Any, field_name: str, allowed: Iterable[str]) -> Any:
    allowed = list(allowed)
    if value not in allowed:
        raise ValidationError(f"{field_name} must be one of: {', '.join(allowed)}")
    return value
