from datetime import date
from decimal import Decimal

import pytest

from wage_engine.models import CalculationStatus
from wage_engine.payroll_run import calculate_all_wages

MAY_START = date(2024, 5, 1)
MAY_END = date(2024, 5, 31)


def test_run_calculates_active_staff_and_skips_incomplete(store):
    summary = calculate_all_wages(MAY_START, MAY_END, store=store)

    assert [c.result.staff_member_id for c in summary.calculated] == ["drv-001"]
    # drv-003 is inactive and never considered.
    assert summary.skipped == {"drv-002": "missing tax_settings"}

    saved = summary.calculated[0]
    assert saved.status is CalculationStatus.CALCULATED
    assert saved.result.net_pay == Decimal("2272.65")
    assert store.get_calculation(saved.id) == saved


def test_run_summary_serialises(store):
    data = calculate_all_wages(MAY_START, MAY_END, store=store).to_dict()
    assert data["pay_period_start"] == "2024-05-01"
    assert data["calculated"][0]["net_pay"] == 2272.65
    assert data["calculated"][0]["status"] == "calculated"
    assert data["skipped"] == {"drv-002": "missing tax_settings"}


def test_run_rejects_reversed_period(store):
    with pytest.raises(ValueError):
        calculate_all_wages(MAY_END, MAY_START, store=store)
