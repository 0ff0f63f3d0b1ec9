"""Wage calculation: timesheet minutes and rates in, gross-to-net breakdown out.

Every function here is a pure function of its arguments. ``calculate_wages``
only adds the port lookups needed to gather those arguments.
"""
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Sequence

from .engine import (
    calculate_income_tax,
    calculate_national_insurance,
    calculate_pension_contribution,
    calculate_student_loan,
    personal_allowance,
    taxable_income,
)
from .errors import SettingsUnavailable
from .metrics import CALC_LATENCY, WAGE_CALCULATIONS
from .models import (
    DeductionBreakdown,
    PayFrequency,
    TaxSettings,
    TimesheetEntry,
    WageCalculationResult,
    WageSettings,
)
from .money import ZERO, minutes_to_hours, to_decimal, within
from .ports import SettingsPort, TimesheetPort
from .rounding import round_currency

logger = logging.getLogger(__name__)


def _result_round(value: Decimal, period: str) -> Decimal:
    return round_currency(value, "wages", "result", period=period)


def _check_period(start: date, end: date) -> None:
    if start > end:
        raise ValueError(f"pay period start {start.isoformat()} is after end {end.isoformat()}")


def compute_deductions(
    gross_pay: Decimal,
    tax_settings: TaxSettings,
    pay_frequency: PayFrequency = PayFrequency.MONTHLY,
) -> DeductionBreakdown:
    """Apply the four independent deductions to ``gross_pay``."""
    gross = to_decimal(gross_pay)
    if gross < ZERO:
        raise ValueError("gross_pay must be non-negative")
    period = pay_frequency.value
    return DeductionBreakdown(
        personal_allowance=personal_allowance(tax_settings.tax_code),
        taxable_income=taxable_income(gross, tax_settings.tax_code),
        income_tax=calculate_income_tax(gross, tax_settings.tax_code, period=period),
        national_insurance=calculate_national_insurance(
            gross, tax_settings.national_insurance_category, pay_frequency
        ),
        pension_contribution=calculate_pension_contribution(
            gross, tax_settings.pension_contribution_rate, period=period
        ),
        student_loan=calculate_student_loan(gross, tax_settings.student_loan_plan, pay_frequency),
    )


def contributing_entries(
    entries: Iterable[TimesheetEntry], staff_member_id: str, start: date, end: date
) -> List[TimesheetEntry]:
    return [
        entry
        for entry in entries
        if entry.is_approved and entry.staff_member_id == staff_member_id and within(entry.date, start, end)
    ]


def compute_wages(
    wage_settings: WageSettings,
    tax_settings: TaxSettings,
    entries: Sequence[TimesheetEntry],
    pay_period_start: date,
    pay_period_end: date,
    pay_frequency: PayFrequency = PayFrequency.MONTHLY,
) -> WageCalculationResult:
    _check_period(pay_period_start, pay_period_end)
    staff_member_id = wage_settings.staff_member_id
    period = pay_frequency.value
    counted = contributing_entries(entries, staff_member_id, pay_period_start, pay_period_end)

    total_hours = minutes_to_hours(sum(e.total_minutes for e in counted))
    standard_hours = minutes_to_hours(sum(e.standard_minutes for e in counted))
    overtime_hours = minutes_to_hours(sum(e.overtime_minutes for e in counted))

    standard_pay = standard_hours * wage_settings.hourly_rate
    overtime_pay = overtime_hours * wage_settings.overtime_rate
    gross_pay = standard_pay + overtime_pay

    deductions = compute_deductions(gross_pay, tax_settings, pay_frequency)
    gross_rounded = _result_round(gross_pay, period)
    total_deductions = _result_round(deductions.total, period)
    # Derived from the emitted figures: net == gross - total_deductions exactly.
    net_pay = gross_rounded - total_deductions

    return WageCalculationResult(
        staff_member_id=staff_member_id,
        pay_period_start=pay_period_start,
        pay_period_end=pay_period_end,
        total_hours=_result_round(total_hours, period),
        standard_hours=_result_round(standard_hours, period),
        overtime_hours=_result_round(overtime_hours, period),
        gross_pay=gross_rounded,
        standard_pay=_result_round(standard_pay, period),
        overtime_pay=_result_round(overtime_pay, period),
        income_tax=_result_round(deductions.income_tax, period),
        national_insurance=_result_round(deductions.national_insurance, period),
        pension_contribution=_result_round(deductions.pension_contribution, period),
        student_loan=_result_round(deductions.student_loan, period),
        other_deductions=_result_round(deductions.other_deductions, period),
        total_deductions=total_deductions,
        net_pay=net_pay,
    )


def calculate_wages(
    staff_member_id: str,
    pay_period_start: date,
    pay_period_end: date,
    *,
    settings: SettingsPort,
    timesheets: TimesheetPort,
    pay_frequency: PayFrequency = PayFrequency.MONTHLY,
) -> WageCalculationResult:
    """Resolve settings and approved entries, then compute the wage result.

    Raises :class:`SettingsUnavailable` when either settings record is missing
    or inactive; no partial result is produced.
    """
    _check_period(pay_period_start, pay_period_end)
    wage_settings = settings.get_wage_settings(staff_member_id)
    tax_settings = settings.get_tax_settings(staff_member_id)

    missing = []
    if wage_settings is None or not wage_settings.is_active:
        missing.append("wage_settings")
    if tax_settings is None or not tax_settings.is_active:
        missing.append("tax_settings")
    if missing:
        WAGE_CALCULATIONS.labels(outcome="settings_unavailable").inc()
        logger.error("Missing %s for staff member %s", " and ".join(missing), staff_member_id)
        raise SettingsUnavailable(staff_member_id, missing)

    entries = timesheets.get_approved_entries(staff_member_id, pay_period_start, pay_period_end)
    with CALC_LATENCY.time():
        result = compute_wages(
            wage_settings,
            tax_settings,
            entries,
            pay_period_start,
            pay_period_end,
            pay_frequency,
        )
    WAGE_CALCULATIONS.labels(outcome="calculated").inc()
    logger.info(
        "Calculated wages for %s %s..%s: gross=%s net=%s",
        staff_member_id,
        pay_period_start.isoformat(),
        pay_period_end.isoformat(),
        result.gross_pay,
        result.net_pay,
    )
    return result


__all__ = ["calculate_wages", "compute_wages", "compute_deductions", "contributing_entries"]
