"""Packaged UK payroll rule documents and their published fingerprints.

Each ``*.json`` file in this directory is one tax year's thresholds and
rates. Files are fingerprinted with SHA-256 so that any edit to a rate table
must be accompanied by a bump of :data:`RATES_VERSION` and a new entry in
:data:`KNOWN_RULE_FILE_HASHES`.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..errors import RuleNotFoundError
from .version import CURRENT_RULES_DOCUMENT, KNOWN_RULE_FILE_HASHES, RATES_VERSION

RULES_DIR = Path(__file__).resolve().parent


@dataclass(frozen=True)
class RuleDocument:
    name: str
    sha256: str
    payload: Mapping[str, Any]

    @classmethod
    def read(cls, path: Path) -> "RuleDocument":
        raw = path.read_bytes()
        return cls(name=path.name, sha256=hashlib.sha256(raw).hexdigest(), payload=json.loads(raw))

    @property
    def tax_year(self) -> Optional[str]:
        return self.payload.get("tax_year")

    def summary(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "tax_year": self.tax_year,
            "sha256": self.sha256,
            "source_url": self.payload.get("source_url"),
            "last_reviewed": self.payload.get("last_reviewed"),
        }


@lru_cache(maxsize=1)
def load_rule_documents() -> Dict[str, RuleDocument]:
    """Every packaged rule document, keyed by file name."""
    return {path.name: RuleDocument.read(path) for path in sorted(RULES_DIR.glob("*.json"))}


def load_rules_payload(name: str = CURRENT_RULES_DOCUMENT) -> Mapping[str, Any]:
    try:
        return load_rule_documents()[name].payload
    except KeyError:
        raise RuleNotFoundError(f"No rules document named {name} in {RULES_DIR}") from None


def build_rules_version_payload() -> Dict[str, Any]:
    """Body of ``GET /rules/version`` and ``hgv-wages rules``."""
    documents = load_rule_documents()
    return {
        "rates_version": RATES_VERSION,
        "current": CURRENT_RULES_DOCUMENT,
        "files": [documents[name].summary() for name in sorted(documents)],
    }


def validate_known_hashes() -> List[str]:
    """Describe every difference between the packaged files and the published fingerprints.

    An empty list means the rule tables on disk are exactly the ones that
    ``RATES_VERSION`` was published for.
    """
    on_disk = {name: doc.sha256 for name, doc in load_rule_documents().items()}
    problems: List[str] = []
    for name in sorted(on_disk.keys() - KNOWN_RULE_FILE_HASHES.keys()):
        problems.append(f"{name} has no published fingerprint")
    for name in sorted(KNOWN_RULE_FILE_HASHES.keys() - on_disk.keys()):
        problems.append(f"{name} is published but missing from {RULES_DIR}")
    for name in sorted(on_disk.keys() & KNOWN_RULE_FILE_HASHES.keys()):
        if on_disk[name] != KNOWN_RULE_FILE_HASHES[name]:
            problems.append(
                f"{name} changed without a rates version bump "
                f"(published {KNOWN_RULE_FILE_HASHES[name][:12]}, found {on_disk[name][:12]})"
            )
    return problems


__all__ = [
    "RuleDocument",
    "RULES_DIR",
    "RATES_VERSION",
    "KNOWN_RULE_FILE_HASHES",
    "CURRENT_RULES_DOCUMENT",
    "load_rule_documents",
    "load_rules_payload",
    "build_rules_version_payload",
    "validate_known_hashes",
]
