from __future__ import annotations

import logging
import warnings

from ..errors import LookupMissWarning
from ..metrics import LOOKUP_MISSES

logger = logging.getLogger("wage_engine.engine")


def report_lookup_miss(kind: str, value: object) -> None:
    """Record a table miss; the caller falls back to a zero deduction."""
    message = f"No {kind.replace('_', ' ')} entry for {value!r}; deduction defaults to 0"
    logger.warning(message)
    LOOKUP_MISSES.labels(kind=kind).inc()
    warnings.warn(message, LookupMissWarning, stacklevel=3)
