"""In-memory implementation of the payroll ports, optionally seeded from JSON."""
from __future__ import annotations

import json
import threading
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .errors import DuplicateSlipNumber
from .models import (
    CalculationStatus,
    StaffProfile,
    StoredCalculation,
    TaxSettings,
    TimesheetEntry,
    WageCalculationResult,
    WageSettings,
    WageSlip,
)
from .money import within


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryPayrollStore:
    """Holds staff, settings, timesheets, calculations and slips in dicts.

    Settings lists keep insertion order; the last active record wins, which
    mirrors "one active record per staff member" when callers deactivate
    superseded rows.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._staff: Dict[str, StaffProfile] = {}
        self._wage_settings: Dict[str, List[WageSettings]] = {}
        self._tax_settings: Dict[str, List[TaxSettings]] = {}
        self._entries: Dict[str, List[TimesheetEntry]] = {}
        self._calculations: Dict[str, StoredCalculation] = {}
        self._slips: Dict[str, WageSlip] = {}

    # Loading -------------------------------------------------------------------------

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], **kwargs: Any) -> "InMemoryPayrollStore":
        store = cls(**kwargs)
        for row in payload.get("staff_members", []) or []:
            store.add_staff(StaffProfile.from_mapping(row))
        for row in payload.get("wage_settings", []) or []:
            store.add_wage_settings(WageSettings.from_mapping(row))
        for row in payload.get("tax_settings", []) or []:
            store.add_tax_settings(TaxSettings.from_mapping(row))
        store.add_entries(TimesheetEntry.from_mapping(row) for row in payload.get("timesheet_entries", []) or [])
        return store

    @classmethod
    def from_json(cls, path: Path | str, **kwargs: Any) -> "InMemoryPayrollStore":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No payroll data at {path}")
        with path.open("r", encoding="utf-8") as fh:
            return cls.from_payload(json.load(fh), **kwargs)

    def add_staff(self, profile: StaffProfile) -> None:
        self._staff[profile.id] = profile

    def add_wage_settings(self, settings: WageSettings) -> None:
        self._wage_settings.setdefault(settings.staff_member_id, []).append(settings)

    def add_tax_settings(self, settings: TaxSettings) -> None:
        self._tax_settings.setdefault(settings.staff_member_id, []).append(settings)

    def add_entries(self, entries: Iterable[TimesheetEntry]) -> None:
        for entry in entries:
            self._entries.setdefault(entry.staff_member_id, []).append(entry)

    # SettingsPort ----------------------------------------------------------------------

    def get_wage_settings(self, staff_member_id: str) -> Optional[WageSettings]:
        active = [s for s in self._wage_settings.get(staff_member_id, []) if s.is_active]
        return active[-1] if active else None

    def get_tax_settings(self, staff_member_id: str) -> Optional[TaxSettings]:
        active = [s for s in self._tax_settings.get(staff_member_id, []) if s.is_active]
        return active[-1] if active else None

    # TimesheetPort ---------------------------------------------------------------------

    def get_approved_entries(self, staff_member_id: str, start: date, end: date) -> Sequence[TimesheetEntry]:
        entries = [
            entry
            for entry in self._entries.get(staff_member_id, [])
            if entry.is_approved and within(entry.date, start, end)
        ]
        return sorted(entries, key=lambda e: (e.date, e.id))

    # StaffPort -------------------------------------------------------------------------

    def get_staff_profile(self, staff_member_id: str) -> Optional[StaffProfile]:
        return self._staff.get(staff_member_id)

    def active_staff_ids(self) -> Sequence[str]:
        return sorted(staff_id for staff_id, profile in self._staff.items() if profile.is_active)

    # CalculationStore ------------------------------------------------------------------

    def save_calculation(self, result: WageCalculationResult) -> StoredCalculation:
        stored = StoredCalculation(
            id=str(uuid.uuid4()),
            result=result,
            status=CalculationStatus.CALCULATED,
            created_at=self._clock(),
        )
        with self._lock:
            self._calculations[stored.id] = stored
        return stored

    def get_calculation(self, calculation_id: str) -> Optional[StoredCalculation]:
        with self._lock:
            return self._calculations.get(calculation_id)

    def calculations_for(self, staff_member_id: str) -> List[StoredCalculation]:
        with self._lock:
            snapshot = list(self._calculations.values())
        rows = [c for c in snapshot if c.result.staff_member_id == staff_member_id]
        return sorted(rows, key=lambda c: c.created_at)

    # Slips -----------------------------------------------------------------------------

    def save_slip(self, slip: WageSlip) -> WageSlip:
        """Store ``slip``; an existing slip with the same number is never replaced."""
        with self._lock:
            if slip.slip_number in self._slips:
                raise DuplicateSlipNumber(slip.slip_number)
            self._slips[slip.slip_number] = slip
        return slip

    def slips_for(self, staff_member_id: str) -> List[WageSlip]:
        with self._lock:
            snapshot = list(self._slips.values())
        return [s for s in snapshot if s.staff_member_id == staff_member_id]


__all__ = ["InMemoryPayrollStore"]
