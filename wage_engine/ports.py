"""Port abstractions for the collaborators around the wage calculator."""
from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .models import (
    StaffProfile,
    StoredCalculation,
    TaxSettings,
    TimesheetEntry,
    WageCalculationResult,
    WageSettings,
)


class SettingsPort(Protocol):
    """Resolves the active wage and tax settings for a staff member."""

    def get_wage_settings(self, staff_member_id: str) -> Optional[WageSettings]:
        ...

    def get_tax_settings(self, staff_member_id: str) -> Optional[TaxSettings]:
        ...


class TimesheetPort(Protocol):
    """Returns approved timesheet entries inside an inclusive date range."""

    def get_approved_entries(self, staff_member_id: str, start: date, end: date) -> Sequence[TimesheetEntry]:
        ...


class StaffPort(Protocol):
    def get_staff_profile(self, staff_member_id: str) -> Optional[StaffProfile]:
        ...

    def active_staff_ids(self) -> Sequence[str]:
        ...


class CalculationStore(Protocol):
    def save_calculation(self, result: WageCalculationResult) -> StoredCalculation:
        ...

    def get_calculation(self, calculation_id: str) -> Optional[StoredCalculation]:
        ...


__all__ = ["SettingsPort", "TimesheetPort", "StaffPort", "CalculationStore"]
