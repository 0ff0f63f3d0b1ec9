from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, status

from . import __version__
from .calculator import calculate_wages, compute_deductions
from .config import data_path, default_pay_frequency
from .errors import RecordNotFound, SettingsUnavailable
from .logging_utils import DEFAULT_LOGGERS, install_redacting_filter
from .models import PayFrequency, StoredCalculation, TaxSettings
from .money import round_pence, to_float
from .observability import Observability
from .payroll_run import calculate_all_wages
from .payslips import generate_wage_slip
from .rules import build_rules_version_payload
from .schemas import (
    DeductionRequest,
    DeductionResponse,
    PayrollRunRequest,
    PayrollRunResponse,
    WageCalculationRequest,
    WageCalculationResponse,
    WageSlipRequest,
    WageSlipResponse,
)
from .store import InMemoryPayrollStore

LOGGER_NAME = "wage_engine"
logger = logging.getLogger(LOGGER_NAME)
install_redacting_filter([*DEFAULT_LOGGERS, "uvicorn.error", "uvicorn.access"])

SERVICE_NAME = "hgv-wage-engine"
_UNPROCESSABLE = 422


def _initial_store() -> InMemoryPayrollStore:
    path = data_path()
    if path is None:
        return InMemoryPayrollStore()
    logger.info("Seeding payroll store from %s", path)
    return InMemoryPayrollStore.from_json(path)


app = FastAPI(title="HGV Buddy Wage Engine", version=__version__)
app.state.store = _initial_store()
Observability(SERVICE_NAME, version=__version__).instrument(app)


def get_store(request: Request) -> InMemoryPayrollStore:
    return request.app.state.store


def _frequency(name: Optional[str]) -> PayFrequency:
    return PayFrequency(name or default_pay_frequency())


def _stored_payload(stored: StoredCalculation) -> Dict[str, Any]:
    data = stored.result.to_dict()
    data.update({"calculation_id": stored.id, "status": stored.status.value})
    return data


@app.get("/healthz")
def healthz() -> Dict[str, Any]:
    return {"ok": True, "service": SERVICE_NAME}


@app.get("/rules/version")
def rules_version() -> Dict[str, Any]:
    return build_rules_version_payload()


@app.post("/calculate/wages", response_model=WageCalculationResponse)
def calculate_wages_endpoint(
    payload: WageCalculationRequest,
    store: InMemoryPayrollStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        result = calculate_wages(
            payload.staff_member_id,
            payload.pay_period_start,
            payload.pay_period_end,
            settings=store,
            timesheets=store,
            pay_frequency=_frequency(payload.pay_frequency),
        )
    except SettingsUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "settings_unavailable",
                "staff_member_id": exc.staff_member_id,
                "missing": list(exc.missing),
            },
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=_UNPROCESSABLE, detail=str(exc)) from exc

    if payload.save:
        return _stored_payload(store.save_calculation(result))
    return result.to_dict()


@app.post("/calculate/deductions", response_model=DeductionResponse)
def calculate_deductions_endpoint(payload: DeductionRequest) -> Dict[str, Any]:
    gross = round_pence(Decimal(str(payload.gross_pay)))
    try:
        tax_settings = TaxSettings(
            staff_member_id="adhoc",
            tax_code=payload.tax_code,
            national_insurance_category=payload.national_insurance_category,
            pension_contribution_rate=Decimal(str(payload.pension_contribution_rate)),
            student_loan_plan=payload.student_loan_plan,
        )
        breakdown = compute_deductions(gross, tax_settings, _frequency(payload.pay_frequency))
    except ValueError as exc:
        raise HTTPException(status_code=_UNPROCESSABLE, detail=str(exc)) from exc

    data = breakdown.to_dict()
    data["gross_pay"] = to_float(gross)
    data["net_pay"] = to_float(gross - round_pence(breakdown.total))
    return data


@app.post("/payroll/run", response_model=PayrollRunResponse)
def payroll_run(
    payload: PayrollRunRequest,
    store: InMemoryPayrollStore = Depends(get_store),
) -> Dict[str, Any]:
    summary = calculate_all_wages(
        payload.pay_period_start,
        payload.pay_period_end,
        store=store,
        pay_frequency=_frequency(payload.pay_frequency),
    )
    return {
        "pay_period_start": summary.pay_period_start,
        "pay_period_end": summary.pay_period_end,
        "calculated": [_stored_payload(c) for c in summary.calculated],
        "skipped": summary.skipped,
    }


@app.post("/payslips", response_model=WageSlipResponse, status_code=status.HTTP_201_CREATED)
def create_payslip(
    payload: WageSlipRequest,
    store: InMemoryPayrollStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        slip = generate_wage_slip(payload.wage_calculation_id, payload.staff_member_id, store=store)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return slip.to_dict()
