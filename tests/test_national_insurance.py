from decimal import Decimal

import pytest

from wage_engine.engine import calculate_national_insurance, normalise_category
from wage_engine.errors import LookupMissWarning
from wage_engine.models import PayFrequency


@pytest.mark.parametrize(
    "category, expected",
    [
        ("A", Decimal("120.00")),
        ("M", Decimal("120.00")),
        ("J", Decimal("20.00")),
        ("Z", Decimal("20.00")),
        ("B", Decimal("58.50")),
        ("H", Decimal("58.50")),
    ],
)
def test_monthly_rate_by_category(category, expected):
    assert calculate_national_insurance(Decimal("2048"), category) == expected


def test_nothing_due_at_or_below_threshold():
    assert calculate_national_insurance(Decimal("1048"), "A") == Decimal("0.00")
    assert calculate_national_insurance(Decimal("500"), "A") == Decimal("0.00")


def test_weekly_threshold():
    assert calculate_national_insurance(Decimal("342"), "A", PayFrequency.WEEKLY) == Decimal("12.00")
    assert calculate_national_insurance(Decimal("242"), "A", PayFrequency.WEEKLY) == Decimal("0.00")


@pytest.mark.parametrize("raw", ["a", " A ", "categoryA", "Category a"])
def test_category_normalisation(raw):
    assert normalise_category(raw) == "A"
    assert calculate_national_insurance(Decimal("2048"), raw) == Decimal("120.00")


def test_unknown_category_defaults_to_zero_with_warning(caplog):
    with pytest.warns(LookupMissWarning, match="national insurance category"):
        amount = calculate_national_insurance(Decimal("5000"), "Q")
    assert amount == Decimal("0")
    assert any(r.name == "wage_engine.engine" and r.levelname == "WARNING" for r in caplog.records)


def test_blank_category_is_a_lookup_miss():
    with pytest.warns(LookupMissWarning):
        assert calculate_national_insurance(Decimal("5000"), "") == Decimal("0")
