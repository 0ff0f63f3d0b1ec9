"""Exception hierarchy for the wage engine."""
from __future__ import annotations

from typing import Iterable, Tuple


class WageEngineError(Exception):
    """Base class for wage engine failures."""


class SettingsUnavailable(WageEngineError):
    """Raised when wage or tax settings cannot be resolved for a staff member.

    ``missing`` names the settings that were absent or inactive, in the order
    ``wage_settings`` then ``tax_settings``.
    """

    def __init__(self, staff_member_id: str, missing: Iterable[str]) -> None:
        self.staff_member_id = staff_member_id
        self.missing: Tuple[str, ...] = tuple(missing)
        super().__init__(
            f"Settings unavailable for staff member {staff_member_id}: {', '.join(self.missing)}"
        )


class RecordNotFound(WageEngineError, LookupError):
    """Raised when a stored calculation or staff profile cannot be found."""


class DuplicateSlipNumber(WageEngineError):
    """Raised when a slip is saved under a number that is already taken."""

    def __init__(self, slip_number: str) -> None:
        self.slip_number = slip_number
        super().__init__(f"Slip number {slip_number} is already in use")


class RuleNotFoundError(WageEngineError, FileNotFoundError):
    """Raised when a rules document cannot be located."""


class RoundingConfigError(WageEngineError, RuntimeError):
    """Raised when the rounding configuration is invalid or missing data."""


class LookupMissWarning(UserWarning):
    """Emitted when an NI category or student-loan plan has no table entry.

    The affected deduction defaults to zero; the warning usually points at bad
    reference data in the tax settings.
    """


__all__ = [
    "WageEngineError",
    "SettingsUnavailable",
    "RecordNotFound",
    "DuplicateSlipNumber",
    "RuleNotFoundError",
    "RoundingConfigError",
    "LookupMissWarning",
]
