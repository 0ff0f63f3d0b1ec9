"""Value objects shared by the calculator, the stores and the HTTP layer."""
from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .money import ZERO, parse_date, to_decimal, to_float

OVERTIME_MULTIPLIER = Decimal("1.5")


class PayFrequency(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class CalculationStatus(str, Enum):
    CALCULATED = "calculated"


class SlipStatus(str, Enum):
    GENERATED = "generated"


def default_overtime_rate(hourly_rate: Decimal) -> Decimal:
    """Overtime defaults to time and a half."""
    return to_decimal(hourly_rate) * OVERTIME_MULTIPLIER


def _serialise(value: Any) -> Any:
    if isinstance(value, Decimal):
        return to_float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def _as_dict(obj: Any) -> Dict[str, Any]:
    return {f.name: _serialise(getattr(obj, f.name)) for f in fields(obj)}


def _bool(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _required_date(value: Any, field_name: str) -> date:
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"{field_name} is required")
    return parsed


@dataclass(frozen=True)
class WageSettings:
    staff_member_id: str
    hourly_rate: Decimal
    overtime_rate: Decimal
    standard_hours_per_week: Decimal = Decimal("40")
    standard_start_time: str = "08:00"
    standard_end_time: str = "17:00"
    is_active: bool = True
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.hourly_rate < ZERO or self.overtime_rate < ZERO:
            raise ValueError("hourly and overtime rates must be non-negative")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "WageSettings":
        hourly = to_decimal(mapping["hourly_rate"])
        overtime_raw = mapping.get("overtime_rate")
        overtime = to_decimal(overtime_raw) if overtime_raw is not None else default_overtime_rate(hourly)
        return cls(
            staff_member_id=str(mapping["staff_member_id"]),
            hourly_rate=hourly,
            overtime_rate=overtime,
            standard_hours_per_week=to_decimal(mapping.get("standard_hours_per_week", 40)),
            standard_start_time=str(mapping.get("standard_start_time") or "08:00"),
            standard_end_time=str(mapping.get("standard_end_time") or "17:00"),
            is_active=_bool(mapping.get("is_active")),
            id=mapping.get("id"),
        )


@dataclass(frozen=True)
class TaxSettings:
    staff_member_id: str
    tax_code: str
    national_insurance_category: str
    pension_contribution_rate: Decimal = ZERO
    student_loan_plan: Optional[str] = None
    is_active: bool = True
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.pension_contribution_rate < ZERO:
            raise ValueError("pension_contribution_rate must be non-negative")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "TaxSettings":
        plan = mapping.get("student_loan_plan")
        return cls(
            staff_member_id=str(mapping["staff_member_id"]),
            tax_code=str(mapping.get("tax_code") or ""),
            national_insurance_category=str(mapping.get("national_insurance_category") or ""),
            pension_contribution_rate=to_decimal(mapping.get("pension_contribution_rate", 0)),
            student_loan_plan=str(plan) if plan else None,
            is_active=_bool(mapping.get("is_active")),
            id=mapping.get("id"),
        )


@dataclass(frozen=True)
class TimesheetEntry:
    id: str
    staff_member_id: str
    date: date
    total_minutes: int
    standard_minutes: int
    overtime_minutes: int
    start_time: str = ""
    end_time: str = ""
    break_minutes: int = 0
    lunch_minutes: int = 0
    is_approved: bool = False
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("total_minutes", "standard_minutes", "overtime_minutes", "break_minutes", "lunch_minutes"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "TimesheetEntry":
        standard = int(mapping.get("standard_minutes", 0) or 0)
        overtime = int(mapping.get("overtime_minutes", 0) or 0)
        total = mapping.get("total_minutes")
        return cls(
            id=str(mapping["id"]),
            staff_member_id=str(mapping["staff_member_id"]),
            date=_required_date(mapping.get("date"), "date"),
            total_minutes=int(total) if total is not None else standard + overtime,
            standard_minutes=standard,
            overtime_minutes=overtime,
            start_time=str(mapping.get("start_time") or ""),
            end_time=str(mapping.get("end_time") or ""),
            break_minutes=int(mapping.get("break_minutes", 0) or 0),
            lunch_minutes=int(mapping.get("lunch_minutes", 0) or 0),
            is_approved=_bool(mapping.get("is_approved"), default=False),
            notes=mapping.get("notes"),
        )


@dataclass(frozen=True)
class StaffProfile:
    id: str
    first_name: str
    family_name: str
    employee_number: str = ""
    national_insurance_number: str = ""
    tax_code: str = ""
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.family_name}".strip()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "StaffProfile":
        return cls(
            id=str(mapping["id"]),
            first_name=str(mapping.get("first_name") or ""),
            family_name=str(mapping.get("family_name") or ""),
            employee_number=str(mapping.get("employee_number") or ""),
            national_insurance_number=str(
                mapping.get("national_insurance_number") or mapping.get("national_insurance") or ""
            ),
            tax_code=str(mapping.get("tax_code") or ""),
            is_active=_bool(mapping.get("is_active")),
        )


@dataclass(frozen=True)
class DeductionBreakdown:
    personal_allowance: Decimal
    taxable_income: Decimal
    income_tax: Decimal
    national_insurance: Decimal
    pension_contribution: Decimal
    student_loan: Decimal
    other_deductions: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return (
            self.income_tax
            + self.national_insurance
            + self.pension_contribution
            + self.student_loan
            + self.other_deductions
        )

    def to_dict(self) -> Dict[str, Any]:
        data = _as_dict(self)
        data["total_deductions"] = to_float(self.total)
        return data


@dataclass(frozen=True)
class WageCalculationResult:
    staff_member_id: str
    pay_period_start: date
    pay_period_end: date
    total_hours: Decimal
    standard_hours: Decimal
    overtime_hours: Decimal
    gross_pay: Decimal
    standard_pay: Decimal
    overtime_pay: Decimal
    income_tax: Decimal
    national_insurance: Decimal
    pension_contribution: Decimal
    student_loan: Decimal
    other_deductions: Decimal
    total_deductions: Decimal
    net_pay: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return _as_dict(self)


@dataclass(frozen=True)
class StoredCalculation:
    id: str
    result: WageCalculationResult
    status: CalculationStatus
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        data = self.result.to_dict()
        data.update({"id": self.id, "status": self.status.value, "created_at": self.created_at.isoformat()})
        return data


@dataclass(frozen=True)
class WageSlip:
    slip_number: str
    wage_calculation_id: str
    staff_member_id: str
    pay_period_start: date
    pay_period_end: date
    employee_name: str
    employee_number: str
    national_insurance_number: str
    tax_code: str
    gross_pay: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    standard_pay: Decimal
    overtime_pay: Decimal
    income_tax: Decimal
    national_insurance_deduction: Decimal
    pension_contribution: Decimal
    student_loan: Decimal
    other_deductions: Decimal
    total_hours: Decimal
    standard_hours: Decimal
    overtime_hours: Decimal
    status: SlipStatus
    generated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return _as_dict(self)
