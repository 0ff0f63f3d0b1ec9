from datetime import date
from decimal import Decimal

import pytest

from wage_engine.calculator import compute_deductions, compute_wages
from wage_engine.engine import calculate_national_insurance
from wage_engine.errors import RoundingConfigError
from wage_engine.models import PayFrequency, TaxSettings, TimesheetEntry, WageSettings
from wage_engine.rounding import RoundingRule, get_rounding_rule, load_rounding_rules, round_currency


def test_packaged_policy_defaults_to_half_up_pennies():
    policy = load_rounding_rules()
    assert policy["defaults"] == {"mode": "HALF_UP", "precision": "nearest_penny"}
    for method in ("income_tax", "national_insurance", "pension", "student_loan"):
        assert get_rounding_rule(method, "line") == RoundingRule("HALF_UP", "nearest_penny")
    assert round_currency(Decimal("10.005"), "wages", "result") == Decimal("10.01")


def test_period_override_takes_precedence(rounding_policy):
    rounding_policy(
        """
defaults: {mode: HALF_UP, precision: nearest_penny}
methods:
  national_insurance:
    line: {}
    periods:
      weekly:
        line: {precision: whole_pound}
  wages:
    result: {}
"""
    )
    assert round_currency(Decimal("42.50"), "national_insurance", "line", period="weekly") == Decimal("43")
    assert round_currency(Decimal("42.505"), "national_insurance", "line", period="monthly") == Decimal("42.51")


def test_half_even_mode_is_honoured(rounding_policy):
    rounding_policy(
        """
defaults: {mode: HALF_EVEN, precision: nearest_penny}
methods:
  national_insurance:
    line: {}
"""
    )
    # 1000.375 above the monthly threshold at 12% is exactly 120.045.
    assert calculate_national_insurance(Decimal("2048.375"), "A") == Decimal("120.04")
    assert round_currency(Decimal("0.125"), "national_insurance", "line") == Decimal("0.12")


@pytest.mark.parametrize(
    "text, message",
    [
        ("methods: {}\n", "No rounding rules configured"),
        ("defaults: {}\n", "must include a 'methods' mapping"),
        ("methods:\n  wages:\n    result: {precision: nearest_farthing}\n", "Unsupported precision"),
        ("methods:\n  wages:\n    result: {mode: ROUND_UP}\n", "Unsupported rounding mode"),
        ("- just\n- a list\n", "must define a mapping"),
    ],
)
def test_invalid_policies_are_rejected(rounding_policy, text, message):
    rounding_policy(text)
    with pytest.raises(RoundingConfigError, match=message):
        round_currency(Decimal("1"), "wages", "result")


def test_missing_policy_file(monkeypatch, tmp_path):
    from wage_engine import rounding

    monkeypatch.setenv("HGV_WAGES_ROUNDING", str(tmp_path / "absent.yaml"))
    rounding.clear_cache()
    with pytest.raises(RoundingConfigError, match="not found"):
        load_rounding_rules()
    monkeypatch.delenv("HGV_WAGES_ROUNDING")
    rounding.clear_cache()


def test_pension_and_result_rounding_honour_period_overrides(rounding_policy):
    rounding_policy(
        """
defaults: {mode: HALF_UP, precision: nearest_penny}
methods:
  income_tax: {line: {}}
  national_insurance: {line: {}}
  student_loan: {line: {}}
  pension:
    line: {}
    periods:
      weekly:
        line: {precision: whole_pound}
  wages:
    result: {}
    periods:
      weekly:
        result: {precision: whole_pound}
"""
    )
    tax = TaxSettings(
        staff_member_id="drv-001",
        tax_code="1257L",
        national_insurance_category="A",
        pension_contribution_rate=Decimal("5"),
    )
    # 5% of 123.45 is 6.1725.
    assert compute_deductions(Decimal("123.45"), tax, PayFrequency.WEEKLY).pension_contribution == Decimal("6")
    assert compute_deductions(Decimal("123.45"), tax, PayFrequency.MONTHLY).pension_contribution == Decimal("6.17")

    wage = WageSettings(staff_member_id="drv-001", hourly_rate=Decimal("12.34"), overtime_rate=Decimal("18"))
    entry = TimesheetEntry(
        id="wk",
        staff_member_id="drv-001",
        date=date(2024, 5, 6),
        total_minutes=600,
        standard_minutes=600,
        overtime_minutes=0,
        is_approved=True,
    )
    weekly = compute_wages(wage, tax, [entry], date(2024, 5, 6), date(2024, 5, 12), PayFrequency.WEEKLY)
    monthly = compute_wages(wage, tax, [entry], date(2024, 5, 6), date(2024, 5, 12), PayFrequency.MONTHLY)
    assert weekly.gross_pay == Decimal("123")
    assert monthly.gross_pay == Decimal("123.40")
