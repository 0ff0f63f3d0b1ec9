"""Progressive UK income tax on the gross of a pay period.

The annual bands are applied directly to whatever gross figure is supplied;
they are not pro-rated to the pay period. Tax codes are reduced to their
digits multiplied by ten, so suffix letters (L, M, N, T, K) have no effect.
"""
from __future__ import annotations

import re
from decimal import Decimal
from typing import List, Optional, Tuple

from ..money import ZERO, positive, to_decimal
from ..rounding import round_currency
from .tables import IncomeTaxTable, TaxBand, income_tax_table

_NON_DIGITS = re.compile(r"\D")


def personal_allowance(tax_code: Optional[str], table: IncomeTaxTable | None = None) -> Decimal:
    """Derive the personal allowance encoded in ``tax_code`` (``1257L`` -> 12570)."""
    table = table or income_tax_table()
    digits = _NON_DIGITS.sub("", tax_code or "")
    if not digits:
        return table.default_personal_allowance
    return Decimal(int(digits) * table.tax_code_multiplier)


def band_breakdown(taxable: Decimal, bands: Tuple[TaxBand, ...]) -> List[Tuple[TaxBand, Decimal]]:
    """Split ``taxable`` across the bands, returning the amount falling in each."""
    remaining = positive(taxable)
    lower = ZERO
    portions: List[Tuple[TaxBand, Decimal]] = []
    for band in bands:
        if remaining <= ZERO:
            break
        if band.upper is None:
            portion = remaining
        else:
            portion = min(remaining, positive(band.upper - lower))
            lower = band.upper
        portions.append((band, portion))
        remaining -= portion
    return portions


def taxable_income(gross_pay: Decimal, tax_code: Optional[str]) -> Decimal:
    return positive(to_decimal(gross_pay) - personal_allowance(tax_code))


def calculate_income_tax(gross_pay: Decimal, tax_code: Optional[str], *, period: str | None = None) -> Decimal:
    table = income_tax_table()
    taxable = positive(to_decimal(gross_pay) - personal_allowance(tax_code, table))
    if taxable <= ZERO:
        return round_currency(ZERO, "income_tax", "line", period=period)
    tax = sum((portion * band.rate for band, portion in band_breakdown(taxable, table.bands)), start=ZERO)
    return round_currency(tax, "income_tax", "line", period=period)
