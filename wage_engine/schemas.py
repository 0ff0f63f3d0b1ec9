"""Pydantic models for the wage engine HTTP API."""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

PayFrequencyName = Literal["monthly", "weekly"]


class WageCalculationRequest(BaseModel):
    staff_member_id: str = Field(..., min_length=1, description="Staff member to calculate for")
    pay_period_start: date = Field(..., description="First day of the pay period (inclusive)")
    pay_period_end: date = Field(..., description="Last day of the pay period (inclusive)")
    pay_frequency: Optional[PayFrequencyName] = Field(
        None, description="Threshold column for NI and student loan; defaults to the service setting"
    )
    save: bool = Field(False, description="Persist the result and return its calculation id")

    @model_validator(mode="after")
    def _period_order(self) -> "WageCalculationRequest":
        if self.pay_period_start > self.pay_period_end:
            raise ValueError("pay_period_start must not be after pay_period_end")
        return self


class WageCalculationResponse(BaseModel):
    staff_member_id: str
    pay_period_start: date
    pay_period_end: date
    total_hours: float
    standard_hours: float
    overtime_hours: float
    gross_pay: float
    standard_pay: float
    overtime_pay: float
    income_tax: float
    national_insurance: float
    pension_contribution: float
    student_loan: float
    other_deductions: float
    total_deductions: float
    net_pay: float
    calculation_id: Optional[str] = None
    status: Optional[str] = None


class DeductionRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    gross_pay: float = Field(..., ge=0, description="Gross pay for the period in GBP")
    tax_code: str = Field("", description="PAYE tax code, e.g. 1257L")
    national_insurance_category: str = Field("A", description="NI category letter")
    pension_contribution_rate: float = Field(0, ge=0, description="Employee pension percentage")
    student_loan_plan: Optional[str] = Field(None, description="plan1, plan2 or plan4")
    pay_frequency: Optional[PayFrequencyName] = None


class DeductionResponse(BaseModel):
    gross_pay: float
    personal_allowance: float
    taxable_income: float
    income_tax: float
    national_insurance: float
    pension_contribution: float
    student_loan: float
    other_deductions: float
    total_deductions: float
    net_pay: float


class PayrollRunRequest(BaseModel):
    pay_period_start: date
    pay_period_end: date
    pay_frequency: Optional[PayFrequencyName] = None

    @model_validator(mode="after")
    def _period_order(self) -> "PayrollRunRequest":
        if self.pay_period_start > self.pay_period_end:
            raise ValueError("pay_period_start must not be after pay_period_end")
        return self


class PayrollRunResponse(BaseModel):
    pay_period_start: date
    pay_period_end: date
    calculated: List[WageCalculationResponse]
    skipped: Dict[str, str]


class WageSlipRequest(BaseModel):
    wage_calculation_id: str = Field(..., min_length=1)
    staff_member_id: str = Field(..., min_length=1)


class WageSlipResponse(BaseModel):
    slip_number: str = Field(..., pattern=r"^WS-\d{4}-\d{2}-\d{3}$")
    wage_calculation_id: str
    staff_member_id: str
    pay_period_start: date
    pay_period_end: date
    employee_name: str
    employee_number: str
    national_insurance_number: str
    tax_code: str
    gross_pay: float
    total_deductions: float
    net_pay: float
    standard_pay: float
    overtime_pay: float
    income_tax: float
    national_insurance_deduction: float
    pension_contribution: float
    student_loan: float
    other_deductions: float
    total_hours: float
    standard_hours: float
    overtime_hours: float
    status: str
    generated_at: datetime
