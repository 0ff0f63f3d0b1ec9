"""HGV Buddy wage engine: UK gross-to-net pay from approved timesheets."""
from __future__ import annotations

__version__ = "0.1.0"

from .calculator import calculate_wages, compute_deductions, compute_wages
from .errors import (
    LookupMissWarning,
    RecordNotFound,
    SettingsUnavailable,
    WageEngineError,
)
from .models import (
    PayFrequency,
    StaffProfile,
    TaxSettings,
    TimesheetEntry,
    WageCalculationResult,
    WageSettings,
    WageSlip,
)
from .payroll_run import calculate_all_wages
from .payslips import generate_wage_slip
from .store import InMemoryPayrollStore

__all__ = [
    "__version__",
    "calculate_wages",
    "compute_deductions",
    "compute_wages",
    "calculate_all_wages",
    "generate_wage_slip",
    "InMemoryPayrollStore",
    "LookupMissWarning",
    "RecordNotFound",
    "SettingsUnavailable",
    "WageEngineError",
    "PayFrequency",
    "StaffProfile",
    "TaxSettings",
    "TimesheetEntry",
    "WageCalculationResult",
    "WageSettings",
    "WageSlip",
]
