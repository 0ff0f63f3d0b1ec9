from decimal import Decimal

import pytest

from wage_engine.engine import calculate_pension_contribution


@pytest.mark.parametrize(
    "gross, rate, expected",
    [
        (Decimal("2625"), Decimal("5"), Decimal("131.25")),
        (Decimal("100"), Decimal("3.5"), Decimal("3.50")),
        (Decimal("0"), Decimal("8"), Decimal("0.00")),
        (Decimal("1234.56"), Decimal("0"), Decimal("0.00")),
        # 0.105 rounds half up.
        (Decimal("2.10"), Decimal("5"), Decimal("0.11")),
    ],
)
def test_pension_is_a_flat_percentage_of_gross(gross, rate, expected):
    assert calculate_pension_contribution(gross, rate) == expected
