"""Student loan repayments: 9% of gross above the plan threshold."""
from __future__ import annotations

import re
from decimal import Decimal
from typing import Optional

from ..models import PayFrequency
from ..money import ZERO, positive, to_decimal
from ..rounding import round_currency
from .lookups import report_lookup_miss
from .tables import student_loan_table

_PLAN_NUMBER = re.compile(r"^(?:plan)?\s*(\d+)$")


def normalise_plan(plan: Optional[str]) -> Optional[str]:
    """Map ``"plan2"``, ``"Plan 2"`` or ``"2"`` to ``"plan2"``; blank means no plan."""
    value = (plan or "").strip().lower()
    if not value:
        return None
    match = _PLAN_NUMBER.match(value)
    if match:
        return f"plan{match.group(1)}"
    return value


def threshold_for(plan: Optional[str], frequency: PayFrequency = PayFrequency.MONTHLY) -> Optional[Decimal]:
    _, plans = student_loan_table()
    thresholds = plans.get(normalise_plan(plan) or "")
    if thresholds is None:
        return None
    return thresholds.for_frequency(frequency)


def calculate_student_loan(
    gross_pay: Decimal,
    plan: Optional[str],
    frequency: PayFrequency = PayFrequency.MONTHLY,
) -> Decimal:
    if normalise_plan(plan) is None:
        return ZERO
    threshold = threshold_for(plan, frequency)
    if threshold is None:
        report_lookup_miss("student_loan_plan", plan)
        return ZERO
    rate, _ = student_loan_table()
    repayment = positive(to_decimal(gross_pay) - threshold) * rate
    return round_currency(repayment, "student_loan", "line", period=frequency.value)
