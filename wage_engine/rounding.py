"""Rounding of pay figures, driven by the ``rules/rounding.yaml`` policy.

A rule is resolved for a ``(method, stage)`` pair, optionally narrowed by pay
frequency, by layering these mappings (most specific wins)::

    defaults
    methods.<method>                      scalar keys only
    methods.<method>.<stage>
    methods.<method>.periods.<period>.<stage>
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .config import rounding_policy_path
from .errors import RoundingConfigError

PRECISIONS: Dict[str, Decimal] = {
    "nearest_penny": Decimal("0.01"),
    "whole_pound": Decimal("1"),
}
MODES: Dict[str, str] = {
    "HALF_UP": ROUND_HALF_UP,
    "HALF_EVEN": ROUND_HALF_EVEN,
}


@dataclass(frozen=True)
class RoundingRule:
    mode: str = "HALF_UP"
    precision: str = "nearest_penny"

    def __post_init__(self) -> None:
        if self.precision not in PRECISIONS:
            raise RoundingConfigError(f"Unsupported precision '{self.precision}' in rounding policy")
        if self.mode not in MODES:
            raise RoundingConfigError(f"Unsupported rounding mode '{self.mode}' in rounding policy")

    def apply(self, amount: Decimal) -> Decimal:
        return amount.quantize(PRECISIONS[self.precision], rounding=MODES[self.mode])


@lru_cache(maxsize=4)
def _read_policy(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise RoundingConfigError(f"rounding policy not found at {path}")
    with path.open("r", encoding="utf-8") as fh:
        policy = yaml.safe_load(fh) or {}
    if not isinstance(policy, dict):
        raise RoundingConfigError(f"rounding policy at {path} must define a mapping")
    if not isinstance(policy.get("methods"), dict):
        raise RoundingConfigError(f"rounding policy at {path} must include a 'methods' mapping")
    return policy


def load_rounding_rules() -> Dict[str, Any]:
    """The parsed policy from ``HGV_WAGES_ROUNDING`` or the packaged default."""
    return _read_policy(rounding_policy_path())


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise RoundingConfigError(f"Rounding rule for {where} must be a mapping")
    return value


def get_rounding_rule(method: str, stage: str, *, period: Optional[str] = None) -> RoundingRule:
    policy = load_rounding_rules()
    method_cfg = policy["methods"].get(method)
    if not isinstance(method_cfg, dict):
        raise RoundingConfigError(f"No rounding rules configured for method '{method}'")

    period_cfg = (method_cfg.get("periods") or {}).get(period) if period else None
    if isinstance(period_cfg, dict) and stage in period_cfg:
        stage_cfg = _mapping(period_cfg[stage], f"method '{method}' period '{period}' stage '{stage}'")
    elif stage in method_cfg:
        stage_cfg = _mapping(method_cfg[stage], f"method '{method}' stage '{stage}'")
    else:
        raise RoundingConfigError(f"No rounding rule for method '{method}' stage '{stage}'")

    layered: Dict[str, Any] = {}
    for layer in (
        policy.get("defaults") or {},
        {k: v for k, v in method_cfg.items() if isinstance(v, str)},
        stage_cfg,
    ):
        layered.update({k: v for k, v in layer.items() if k in ("mode", "precision") and v})
    return RoundingRule(**layered)


def round_currency(amount: Decimal, method: str, stage: str, *, period: Optional[str] = None) -> Decimal:
    """Round ``amount`` with the rule configured for ``method``/``stage``."""
    return get_rounding_rule(method, stage, period=period).apply(amount)


def clear_cache() -> None:
    _read_policy.cache_clear()


__all__ = [
    "RoundingRule",
    "clear_cache",
    "get_rounding_rule",
    "load_rounding_rules",
    "round_currency",
]
