"""Configuration helpers for the wage engine service."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent
_FREQUENCIES = {"monthly", "weekly"}


def data_path() -> Optional[Path]:
    """Location of the JSON fixture used to seed the service store, if any."""
    configured = os.getenv("HGV_WAGES_DATA")
    if configured:
        return Path(configured).expanduser().resolve()
    return None


def rounding_policy_path() -> Path:
    configured = os.getenv("HGV_WAGES_ROUNDING")
    if configured:
        return Path(configured).expanduser().resolve()
    return _PACKAGE_DIR / "rules" / "rounding.yaml"


def default_pay_frequency() -> str:
    raw = (os.getenv("HGV_WAGES_PAY_FREQUENCY") or "monthly").strip().lower()
    if raw not in _FREQUENCIES:
        logger.warning("Ignoring invalid HGV_WAGES_PAY_FREQUENCY: %s", raw)
        return "monthly"
    return raw


def service_env() -> str:
    return os.getenv("SERVICE_ENV") or os.getenv("ENVIRONMENT") or "local"


def service_version() -> str:
    return os.getenv("SERVICE_VERSION") or os.getenv("VERSION") or "dev"
