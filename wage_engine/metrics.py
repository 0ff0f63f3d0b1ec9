"""Domain metrics exported by the wage engine."""
from __future__ import annotations

from prometheus_client import Counter, Histogram

WAGE_CALCULATIONS = Counter(
    "wage_engine_calculations_total",
    "Wage calculations attempted, by outcome",
    ["outcome"],
)
LOOKUP_MISSES = Counter(
    "wage_engine_lookup_misses_total",
    "Deduction table lookups that found no entry and defaulted to zero",
    ["kind"],
)
CALC_LATENCY = Histogram(
    "wage_engine_calculation_seconds",
    "Wage calculation latency",
)
PAYSLIPS_GENERATED = Counter(
    "wage_engine_payslips_generated_total",
    "Payslips generated",
)
