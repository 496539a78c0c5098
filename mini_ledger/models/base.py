"""Numeric and time helpers shared across ledger models."""

import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Union

Number = Union[int, float, Decimal]


def is_number(value: Any) -> bool:
    """Return True for int, float and Decimal values. ``bool`` is excluded."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_nan(value: Number) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def is_finite(value: Number) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
