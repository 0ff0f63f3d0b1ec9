"""Deduction engines exports."""

from .income_tax import band_breakdown, calculate_income_tax, personal_allowance, taxable_income
from .national_insurance import calculate_national_insurance, normalise_category
from .pension import calculate_pension_contribution
from .student_loan import calculate_student_loan, normalise_plan

__all__ = [
    "band_breakdown",
    "calculate_income_tax",
    "personal_allowance",
    "taxable_income",
    "calculate_national_insurance",
    "normalise_category",
    "calculate_pension_contribution",
    "calculate_student_loan",
    "normalise_plan",
]
