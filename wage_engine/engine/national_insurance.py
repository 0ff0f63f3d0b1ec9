"""Class 1 employee National Insurance by category letter."""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..models import PayFrequency
from ..money import ZERO, positive, to_decimal
from ..rounding import round_currency
from .lookups import report_lookup_miss
from .tables import ThresholdRate, national_insurance_table


def normalise_category(category: Optional[str]) -> str:
    """Reduce ``"a"``, ``" A "`` or ``"categoryA"`` to ``"A"``."""
    value = (category or "").strip()
    if value.lower().startswith("category"):
        value = value[len("category"):].strip()
    return value.upper()


def rate_for(category: Optional[str], frequency: PayFrequency = PayFrequency.MONTHLY) -> Optional[ThresholdRate]:
    by_frequency = national_insurance_table().get(normalise_category(category))
    if by_frequency is None:
        return None
    return by_frequency.get(frequency)


def calculate_national_insurance(
    gross_pay: Decimal,
    category: Optional[str],
    frequency: PayFrequency = PayFrequency.MONTHLY,
) -> Decimal:
    entry = rate_for(category, frequency)
    if entry is None:
        report_lookup_miss("national_insurance_category", category)
        return ZERO
    contribution = positive(to_decimal(gross_pay) - entry.threshold) * entry.rate
    return round_currency(contribution, "national_insurance", "line", period=frequency.value)
