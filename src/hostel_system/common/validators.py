from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def _within(value: str, field_name: str, max_len: Optional[int]) -> str:
    if max_len is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_non_empty(value: str, field_name: str, *, max_len: Optional[int] = None) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return _within(str(value).strip(), field_name, max_len)


def optional_text(value: Optional[str], field_name: str = "value", *, max_len: Optional[int] = None) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    return _within(value, field_name, max_len)


def require_positive_int(value, field_name: str) -> int:
    # bool is an int subclass; 1.9 must not become 1
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def require_enum(enum_cls: Type[E], value, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def require_month(month, year) -> tuple[int, int]:
    try:
        month, year = int(month), int(year)
    except (TypeError, ValueError):
        raise ValidationError("month and year must be integers")
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not 1900 <= year <= 9999:
        raise ValidationError("year is out of range")
    return month, year
