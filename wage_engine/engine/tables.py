"""Typed views over the rate tables in the current rules document."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Tuple

from ..models import PayFrequency
from ..money import to_decimal
from ..rules import load_rules_payload


@dataclass(frozen=True)
class TaxBand:
    name: str
    upper: Optional[Decimal]
    rate: Decimal

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TaxBand":
        upper = data.get("upper")
        return cls(
            name=str(data.get("name", "")),
            upper=to_decimal(upper) if upper is not None else None,
            rate=to_decimal(data.get("rate", 0)),
        )


@dataclass(frozen=True)
class IncomeTaxTable:
    default_personal_allowance: Decimal
    tax_code_multiplier: int
    bands: Tuple[TaxBand, ...]


@dataclass(frozen=True)
class ThresholdRate:
    threshold: Decimal
    rate: Decimal


@dataclass(frozen=True)
class StudentLoanThresholds:
    weekly: Decimal
    monthly: Decimal
    annual: Decimal

    def for_frequency(self, frequency: PayFrequency) -> Decimal:
        return self.weekly if frequency is PayFrequency.WEEKLY else self.monthly


@lru_cache(maxsize=1)
def income_tax_table() -> IncomeTaxTable:
    cfg = load_rules_payload()["income_tax"]
    bands = tuple(TaxBand.from_dict(b) for b in cfg.get("bands", []))
    if not bands or bands[-1].upper is not None:
        raise ValueError("income tax bands must end with an open-ended band")
    return IncomeTaxTable(
        default_personal_allowance=to_decimal(cfg["default_personal_allowance"]),
        tax_code_multiplier=int(cfg.get("tax_code_multiplier", 10)),
        bands=bands,
    )


@lru_cache(maxsize=1)
def national_insurance_table() -> Dict[str, Dict[PayFrequency, ThresholdRate]]:
    categories = load_rules_payload()["national_insurance"]["categories"]
    table: Dict[str, Dict[PayFrequency, ThresholdRate]] = {}
    for category, by_frequency in categories.items():
        table[category.upper()] = {
            PayFrequency(freq): ThresholdRate(
                threshold=to_decimal(cfg["threshold"]),
                rate=to_decimal(cfg["rate"]),
            )
            for freq, cfg in by_frequency.items()
        }
    return table


@lru_cache(maxsize=1)
def student_loan_table() -> Tuple[Decimal, Dict[str, StudentLoanThresholds]]:
    cfg = load_rules_payload()["student_loan"]
    plans = {
        name.lower(): StudentLoanThresholds(
            weekly=to_decimal(values["weekly"]),
            monthly=to_decimal(values["monthly"]),
            annual=to_decimal(values["annual"]),
        )
        for name, values in cfg.get("plans", {}).items()
    }
    return to_decimal(cfg["repayment_rate"]), plans
