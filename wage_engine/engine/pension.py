from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..money import to_decimal
from ..rounding import round_currency

HUNDRED = Decimal(100)


def calculate_pension_contribution(
    gross_pay: Decimal, rate_percent: Decimal, *, period: Optional[str] = None
) -> Decimal:
    """Employee pension at ``rate_percent`` of gross, with no qualifying threshold."""
    contribution = to_decimal(gross_pay) * (to_decimal(rate_percent) / HUNDRED)
    return round_currency(contribution, "pension", "line", period=period)
