from decimal import Decimal

import pytest

from wage_engine.engine import band_breakdown, calculate_income_tax, personal_allowance, taxable_income
from wage_engine.engine.tables import income_tax_table


@pytest.mark.parametrize(
    "code, expected",
    [
        ("1257L", Decimal("12570")),
        ("1100M", Decimal("11000")),
        ("K475", Decimal("4750")),
        ("BR", Decimal("12570")),
        ("", Decimal("12570")),
        (None, Decimal("12570")),
    ],
)
def test_personal_allowance_from_tax_code(code, expected):
    assert personal_allowance(code) == expected


def test_income_below_allowance_is_untaxed():
    assert calculate_income_tax(Decimal("12570"), "1257L") == Decimal("0.00")
    assert taxable_income(Decimal("3000"), "1257L") == Decimal("0")


@pytest.mark.parametrize(
    "gross, expected",
    [
        (Decimal("12571"), Decimal("0.20")),
        (Decimal("62840"), Decimal("10054.00")),
        (Decimal("62841"), Decimal("10054.40")),
        (Decimal("137710"), Decimal("40002.00")),
        (Decimal("137711"), Decimal("40002.45")),
    ],
)
def test_band_boundaries_apply_to_taxable_amount(gross, expected):
    assert calculate_income_tax(gross, "1257L") == expected


def test_band_breakdown_splits_across_bands():
    bands = income_tax_table().bands
    portions = {band.name: amount for band, amount in band_breakdown(Decimal("130000"), bands)}
    assert portions == {
        "basic": Decimal("50270"),
        "higher": Decimal("74870"),
        "additional": Decimal("4860"),
    }


def test_period_gross_uses_annual_bands_unscaled():
    # A single month's pay below the allowance pays no tax at all.
    assert calculate_income_tax(Decimal("2625.00"), "1257L", period="monthly") == Decimal("0.00")
    assert calculate_income_tax(Decimal("15000.00"), "1257L", period="monthly") == Decimal("486.00")


def test_income_tax_is_rounded_half_up_to_pence():
    # 0.025 taxable at 20% is 0.005, which rounds up.
    assert calculate_income_tax(Decimal("12570.025"), "1257L") == Decimal("0.01")
