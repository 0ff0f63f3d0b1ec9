"""Canonical versioning for published wage rules."""
from __future__ import annotations

from typing import Dict

# Update this version whenever any document in ``wage_engine/rules`` changes.
RATES_VERSION: str = "2024-25.1"

# Expected SHA-256 digests for each rules file; tests keep these in sync with
# the documents on disk.
KNOWN_RULE_FILE_HASHES: Dict[str, str] = {
    "uk_paye_2024_25.json": "1d9bbb7787d7e1463a32b57f4aef3f800f0f15f05a9b81967be5b03d35af9ff6",
}

CURRENT_RULES_DOCUMENT = "uk_paye_2024_25.json"

__all__ = ["RATES_VERSION", "KNOWN_RULE_FILE_HASHES", "CURRENT_RULES_DOCUMENT"]
