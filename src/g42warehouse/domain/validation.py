"""Field validators.

Each rule exists once here. Constructors assign through property setters and
setters call these functions. Every validator returns the normalized value
to store.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TypeVar

from g42warehouse.errors import ValidationError

E = TypeVar("E", bound=Enum)


def require_text(field: str, value: object) -> str:
    """Non-empty string, returned trimmed."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must not be empty")
    return value.strip()


def optional_text(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def require_past_date(field: str, value: object) -> date:
    """A date that is not strictly after today. Datetimes are truncated."""
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise ValidationError(field, "must be a date")
    if value > date.today():
        raise ValidationError(field, "must not be in the future")
    return value


def require_positive_decimal(field: str, value: object) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(field, "must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(field, "must be a number") from None
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(field, "must be positive")
    return amount


def _as_float(field: str, value: object) -> float:
    if isinstance(value, bool):
        raise ValidationError(field, "must be a number")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(field, "must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(field, "must be finite")
    return number


def require_positive(field: str, value: object) -> float:
    number = _as_float(field, value)
    if number <= 0:
        raise ValidationError(field, "must be positive")
    return number


def require_range(field: str, value: object, low: float, high: float) -> float:
    """Inclusive range check."""
    number = _as_float(field, value)
    if number < low or number > high:
        raise ValidationError(field, f"value out of range [{low:g}, {high:g}]")
    return number


def optional_range(field: str, value: object, low: float, high: float) -> float | None:
    if value is None:
        return None
    return require_range(field, value, low, high)


def require_positive_int(field: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "must be an integer")
    if value <= 0:
        raise ValidationError(field, "must be positive")
    return value


def require_member(field: str, enum_type: type[E], value: object) -> E:
    """Coerce ``value`` into ``enum_type`` (members or their raw values)."""
    try:
        return enum_type(value)
    except (TypeError, ValueError):
        allowed = ", ".join(m.name for m in enum_type)
        raise ValidationError(field, f"must be one of {allowed}") from None
