"""Payslip records for stored wage calculations."""
from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

from .errors import DuplicateSlipNumber, RecordNotFound
from .metrics import PAYSLIPS_GENERATED
from .models import SlipStatus, StaffProfile, StoredCalculation, WageSlip
from .ports import CalculationStore, StaffPort

logger = logging.getLogger(__name__)

_MAX_NUMBER_ATTEMPTS = 20


class SlipSink(Protocol):
    def save_slip(self, slip: WageSlip) -> WageSlip:
        """Persist ``slip`` or raise :class:`DuplicateSlipNumber` if its number is taken."""
        ...


class _Store(CalculationStore, StaffPort, SlipSink, Protocol):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def slip_number(now: datetime, rng: random.Random) -> str:
    """``WS-<year>-<2-digit month>-<3-digit random sequence>``."""
    return f"WS-{now.year}-{now.month:02d}-{rng.randrange(1000):03d}"


def build_wage_slip(
    stored: StoredCalculation,
    profile: StaffProfile,
    *,
    number: str,
    generated_at: datetime,
) -> WageSlip:
    result = stored.result
    return WageSlip(
        slip_number=number,
        wage_calculation_id=stored.id,
        staff_member_id=profile.id,
        pay_period_start=result.pay_period_start,
        pay_period_end=result.pay_period_end,
        employee_name=profile.full_name,
        employee_number=profile.employee_number,
        national_insurance_number=profile.national_insurance_number,
        tax_code=profile.tax_code,
        gross_pay=result.gross_pay,
        total_deductions=result.total_deductions,
        net_pay=result.net_pay,
        standard_pay=result.standard_pay,
        overtime_pay=result.overtime_pay,
        income_tax=result.income_tax,
        national_insurance_deduction=result.national_insurance,
        pension_contribution=result.pension_contribution,
        student_loan=result.student_loan,
        other_deductions=result.other_deductions,
        total_hours=result.total_hours,
        standard_hours=result.standard_hours,
        overtime_hours=result.overtime_hours,
        status=SlipStatus.GENERATED,
        generated_at=generated_at,
    )


def generate_wage_slip(
    wage_calculation_id: str,
    staff_member_id: str,
    *,
    store: _Store,
    clock: Callable[[], datetime] = _utcnow,
    rng: Optional[random.Random] = None,
) -> WageSlip:
    stored = store.get_calculation(wage_calculation_id)
    if stored is None:
        raise RecordNotFound(f"No wage calculation {wage_calculation_id}")
    if stored.result.staff_member_id != staff_member_id:
        raise RecordNotFound(
            f"Wage calculation {wage_calculation_id} does not belong to staff member {staff_member_id}"
        )
    profile = store.get_staff_profile(staff_member_id)
    if profile is None:
        raise RecordNotFound(f"No staff member {staff_member_id}")

    rng = rng or random.Random()
    now = clock()
    # The sequence is only three digits; the store rejects a taken number and we redraw.
    for _ in range(_MAX_NUMBER_ATTEMPTS):
        number = slip_number(now, rng)
        try:
            slip = store.save_slip(build_wage_slip(stored, profile, number=number, generated_at=now))
        except DuplicateSlipNumber:
            continue
        break
    else:
        raise RuntimeError(f"Could not allocate a free slip number for {now:%Y-%m}")

    PAYSLIPS_GENERATED.inc()
    logger.info("Generated wage slip %s for calculation %s", slip.slip_number, wage_calculation_id)
    return slip


__all__ = ["generate_wage_slip", "build_wage_slip", "slip_number"]
