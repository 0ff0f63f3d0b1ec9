"""Batch wage calculation for every active staff member."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Protocol

from .calculator import calculate_wages
from .errors import SettingsUnavailable
from .models import PayFrequency, StoredCalculation
from .ports import CalculationStore, SettingsPort, StaffPort, TimesheetPort

logger = logging.getLogger(__name__)


class PayrollStore(SettingsPort, TimesheetPort, StaffPort, CalculationStore, Protocol):
    pass


@dataclass
class PayrollRunSummary:
    pay_period_start: date
    pay_period_end: date
    calculated: List[StoredCalculation] = field(default_factory=list)
    skipped: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pay_period_start": self.pay_period_start.isoformat(),
            "pay_period_end": self.pay_period_end.isoformat(),
            "calculated": [c.to_dict() for c in self.calculated],
            "skipped": dict(self.skipped),
        }


def calculate_all_wages(
    pay_period_start: date,
    pay_period_end: date,
    *,
    store: PayrollStore,
    pay_frequency: PayFrequency = PayFrequency.MONTHLY,
) -> PayrollRunSummary:
    """Calculate and save wages for each active staff member.

    Staff members without usable settings are skipped and reported; they do
    not stop the run.
    """
    if pay_period_start > pay_period_end:
        raise ValueError("pay period start is after end")

    summary = PayrollRunSummary(pay_period_start=pay_period_start, pay_period_end=pay_period_end)
    staff_ids = list(store.active_staff_ids())
    for staff_id in staff_ids:
        try:
            result = calculate_wages(
                staff_id,
                pay_period_start,
                pay_period_end,
                settings=store,
                timesheets=store,
                pay_frequency=pay_frequency,
            )
        except SettingsUnavailable as exc:
            summary.skipped[staff_id] = "missing " + ", ".join(exc.missing)
            continue
        summary.calculated.append(store.save_calculation(result))

    logger.info(
        "Payroll run %s..%s: %d calculated, %d skipped of %d staff",
        pay_period_start.isoformat(),
        pay_period_end.isoformat(),
        len(summary.calculated),
        len(summary.skipped),
        len(staff_ids),
    )
    return summary


__all__ = ["PayrollRunSummary", "calculate_all_wages"]
