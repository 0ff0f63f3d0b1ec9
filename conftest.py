"""Shared fixtures: a seeded payroll store, settings and rounding policies."""
from __future__ import annotations

import json
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from wage_engine import rounding
from wage_engine.models import TaxSettings, TimesheetEntry, WageSettings
from wage_engine.store import InMemoryPayrollStore

ROOT = Path(__file__).resolve().parent
FIXTURE_PATH = ROOT / "tests" / "fixtures" / "payroll.json"

FIXED_NOW = datetime(2024, 6, 3, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def rounding_policy(monkeypatch, tmp_path):
    """Write a rounding policy to a temp file and point the engine at it."""

    def _write(text: str) -> Path:
        path = tmp_path / "rounding.yaml"
        path.write_text(text, encoding="utf-8")
        monkeypatch.setenv("HGV_WAGES_ROUNDING", str(path))
        rounding.clear_cache()
        return path

    yield _write
    monkeypatch.delenv("HGV_WAGES_ROUNDING", raising=False)
    rounding.clear_cache()


@pytest.fixture()
def fixture_path() -> Path:
    return FIXTURE_PATH


@pytest.fixture()
def payroll_payload() -> dict:
    with FIXTURE_PATH.open("r", encoding="utf-8") as fh:
        return json.load(fh)


@pytest.fixture()
def store(payroll_payload) -> InMemoryPayrollStore:
    return InMemoryPayrollStore.from_payload(payroll_payload, clock=lambda: FIXED_NOW)


@pytest.fixture()
def wage_settings() -> WageSettings:
    return WageSettings(staff_member_id="drv-001", hourly_rate=Decimal("15"), overtime_rate=Decimal("22.50"))


@pytest.fixture()
def tax_settings() -> TaxSettings:
    return TaxSettings(
        staff_member_id="drv-001",
        tax_code="1257L",
        national_insurance_category="A",
        pension_contribution_rate=Decimal("5"),
        student_loan_plan="plan2",
    )


@pytest.fixture()
def may_entries() -> list[TimesheetEntry]:
    # 160 standard hours and 10 overtime hours across the month.
    minutes = [(2400, 0), (2400, 120), (2400, 240), (2400, 240)]
    return [
        TimesheetEntry(
            id=f"e-{i}",
            staff_member_id="drv-001",
            date=date(2024, 5, 6 + 7 * i),
            total_minutes=std + ot,
            standard_minutes=std,
            overtime_minutes=ot,
            is_approved=True,
        )
        for i, (std, ot) in enumerate(minutes)
    ]
