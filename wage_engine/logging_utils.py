"""Logging helpers that redact PII before writing to logs."""
from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

# Email addresses and UK National Insurance numbers (e.g. "QQ 12 34 56 C").
PII_PATTERN = re.compile(
    r"([A-Za-z0-9_.+-]+@[A-Za-z0-9-]+\.[A-Za-z0-9.-]+)"
    r"|\b[A-Z]{2}\s?\d{2}\s?\d{2}\s?\d{2}\s?[A-D]\b"
)


class RedactingFilter(logging.Filter):
    """Replace obvious PII patterns with a redaction marker."""

    def __init__(self, name: str = "") -> None:
        super().__init__(name)
        self._replacement = "[REDACTED]"

    def _clean(self, value: object) -> object:
        if isinstance(value, str):
            return PII_PATTERN.sub(self._replacement, value)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._clean(record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {key: self._clean(arg) for key, arg in record.args.items()}
            else:
                record.args = tuple(self._clean(arg) for arg in record.args)
        return True


# Filters on a logger do not apply to records propagated from its children,
# so every module logger that may carry staff details is listed.
DEFAULT_LOGGERS = (
    "wage_engine",
    "wage_engine.calculator",
    "wage_engine.config",
    "wage_engine.engine",
    "wage_engine.payroll_run",
    "wage_engine.payslips",
)

_configured: set[str] = set()


def install_redacting_filter(target_loggers: Optional[Iterable[str]] = None) -> None:
    """Ensure the redacting filter is installed once on each named logger."""
    names = list(target_loggers or DEFAULT_LOGGERS)
    for name in names:
        if name in _configured:
            continue
        logging.getLogger(name).addFilter(RedactingFilter())
        _configured.add(name)
