"""
PMIS Government Discrepancy Engine
==================================

Field-by-field comparison of a submitted identity against the
government-held reference record.

Comparison Rules (evaluated independently, in this order):
    - name: exact match after lowercasing, collapsing whitespace and
      stripping punctuation (in that order); on mismatch severity depends on
      whether the first and last name tokens still agree
        both agree   -> minor
        one agrees   -> major
        none agree   -> critical
    - dateOfBirth: calendar date equality, mismatch is major
    - gender: exact equality, mismatch is critical
    - address: only when a street is submitted; at least 70% of the
      submitted tokens must appear in the reference address, otherwise
      minor

Author: PMIS Team
Version: 1.0.0
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Set, Union

from shared.schemas.validation import DiscrepancySeverity


ADDRESS_MATCH_THRESHOLD = 0.70

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class IdentityRecord:
    """
    Identity fields compared against the registry.

    ``address`` is the street-level line; other address parts are not
    compared. ``father_name``/``mother_name`` are carried for display only.
    """
    name: str
    date_of_birth: Union[date, str]
    gender: str
    address: Optional[str] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None


@dataclass
class Discrepancy:
    """One field-level mismatch."""
    field: str
    provided_value: Optional[str]
    government_value: Optional[str]
    severity: DiscrepancySeverity
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "provided_value": self.provided_value,
            "government_value": self.government_value,
            "severity": self.severity.value,
            "notes": self.notes,
        }


# =============================================================================
# Normalization
# =============================================================================


def normalize_name(name: str) -> str:
    """
    Lowercase, collapse whitespace, then drop punctuation.

    Punctuation goes last, so "John - Doe" keeps two spaces and does not
    equal "John Doe".
    """
    collapsed = _WHITESPACE.sub(" ", name.lower()).strip()
    return _PUNCTUATION.sub("", collapsed)


def name_discrepancy_severity(provided: str, government: str) -> DiscrepancySeverity:
    """Grade a name mismatch by its first and last tokens."""
    provided_tokens = normalize_name(provided).split(" ")
    government_tokens = normalize_name(government).split(" ")

    first_match = provided_tokens[0] == government_tokens[0]
    last_match = provided_tokens[-1] == government_tokens[-1]

    if first_match and last_match:
        return DiscrepancySeverity.MINOR
    if first_match or last_match:
        return DiscrepancySeverity.MAJOR
    return DiscrepancySeverity.CRITICAL


def address_tokens(address: str) -> List[str]:
    return _PUNCTUATION.sub(" ", address.lower()).split()


def address_overlap(submitted: str, reference: str) -> float:
    """
    Fraction of submitted-address tokens present in the reference address.

    Returns 1.0 when the submitted address has no tokens.
    """
    submitted_tokens = address_tokens(submitted)
    if not submitted_tokens:
        return 1.0
    reference_tokens: Set[str] = set(address_tokens(reference))
    common = [t for t in submitted_tokens if t in reference_tokens]
    return len(common) / len(submitted_tokens)


def addresses_match(submitted: str, reference: str) -> bool:
    return address_overlap(submitted, reference) >= ADDRESS_MATCH_THRESHOLD


def calendar_date(value: Union[date, datetime, str, None]) -> Optional[str]:
    """ISO calendar date (YYYY-MM-DD) with any time component dropped."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10]).isoformat()
    except ValueError:
        return text


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


# =============================================================================
# Comparison
# =============================================================================


def compare_identity(
    submitted: IdentityRecord,
    reference: IdentityRecord,
) -> List[Discrepancy]:
    """
    Compare a submitted identity with the registry record.

    Args:
        submitted: Identity as entered for the prisoner
        reference: Identity held by the registry

    Returns:
        Discrepancies in field order name, dateOfBirth, gender, address;
        empty when everything matches
    """
    discrepancies: List[Discrepancy] = []

    if normalize_name(submitted.name) != normalize_name(reference.name):
        discrepancies.append(Discrepancy(
            field="name",
            provided_value=submitted.name,
            government_value=reference.name,
            severity=name_discrepancy_severity(submitted.name, reference.name),
            notes="Name does not match government records",
        ))

    provided_dob = calendar_date(submitted.date_of_birth)
    government_dob = calendar_date(reference.date_of_birth)
    if provided_dob != government_dob:
        discrepancies.append(Discrepancy(
            field="dateOfBirth",
            provided_value=provided_dob,
            government_value=government_dob,
            severity=DiscrepancySeverity.MAJOR,
            notes="Date of birth does not match government records",
        ))

    provided_gender = _enum_value(submitted.gender)
    government_gender = _enum_value(reference.gender)
    if provided_gender != government_gender:
        discrepancies.append(Discrepancy(
            field="gender",
            provided_value=provided_gender,
            government_value=government_gender,
            severity=DiscrepancySeverity.CRITICAL,
            notes="Gender does not match government records",
        ))

    if submitted.address:
        reference_address = reference.address or ""
        if not addresses_match(submitted.address, reference_address):
            discrepancies.append(Discrepancy(
                field="address",
                provided_value=submitted.address,
                government_value=reference_address,
                severity=DiscrepancySeverity.MINOR,
                notes="Address does not match government records",
            ))

    return discrepancies
