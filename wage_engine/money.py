from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

PENNY = Decimal("0.01")
ZERO = Decimal("0")
MINUTES_PER_HOUR = Decimal("60")


def to_decimal(value: Any) -> Decimal:
    """Convert a number to ``Decimal`` preserving precision for ints/floats/strings."""

    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise TypeError("Booleans are not valid monetary values")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        if value.strip() == "":
            raise ValueError("empty string is not a valid amount")
        return Decimal(value.strip())
    raise TypeError(f"Unsupported numeric type: {type(value)!r}")


def round_pence(value: Any) -> Decimal:
    """Round the supplied value to pence using HALF_UP."""

    return to_decimal(value).quantize(PENNY, rounding=ROUND_HALF_UP)


def positive(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO


def minutes_to_hours(minutes: int) -> Decimal:
    return Decimal(int(minutes)) / MINUTES_PER_HOUR


def to_float(value: Decimal) -> float:
    return float(round_pence(value))


def parse_date(value: str | date | datetime | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Accept ISO dates or ISO datetimes.
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise ValueError(f"Invalid date string: {value}") from exc
    raise TypeError(f"Unsupported date value: {type(value)!r}")


def within(date_value: date | None, start: date, end: date) -> bool:
    if date_value is None:
        return False
    return start <= date_value <= end
