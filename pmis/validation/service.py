"""
Government Validation Service
=============================

Runs the discrepancy engine against a registry record and reports the
outcome as a validation status.

Outcomes:
    - verified: record found, no discrepancies
    - discrepancies_found: record found, one or more discrepancies
    - not_found: registry has no record for the ID
    - error: the registry lookup failed

Lookup failures are reported through the status, never raised.

Author: PMIS Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from shared.schemas.validation import PrisonerIdentityData, ValidationStatus
from pmis.validation.engine import Discrepancy, IdentityRecord, compare_identity
from pmis.validation.registry import ReferenceLookup


logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of validating one identity."""
    status: ValidationStatus
    discrepancies: List[Discrepancy] = field(default_factory=list)
    reference: Optional[IdentityRecord] = None
    message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status in (
            ValidationStatus.VERIFIED,
            ValidationStatus.DISCREPANCIES_FOUND,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "validation_status": self.status.value,
            "discrepancies": [d.to_dict() for d in self.discrepancies],
            "message": self.message,
        }


def full_name(first: str, middle: Optional[str], last: str) -> str:
    """Join the non-empty name parts with single spaces."""
    return " ".join(part.strip() for part in (first, middle, last) if part and part.strip())


def identity_from_prisoner_data(data: PrisonerIdentityData) -> IdentityRecord:
    """Build the complete identity record the engine compares."""
    street = data.address.street if data.address else None
    return IdentityRecord(
        name=full_name(data.first_name, data.middle_name, data.last_name),
        date_of_birth=data.date_of_birth,
        gender=data.gender.value,
        address=street.strip() if street and street.strip() else None,
    )


class GovernmentValidationService:
    """
    Validates submitted identities against a reference registry.

    Example:
        service = GovernmentValidationService(InMemoryReferenceRegistry())
        result = await service.validate(identity, "123456789012")
        if result.status == ValidationStatus.VERIFIED:
            ...
    """

    def __init__(self, lookup: ReferenceLookup):
        self.lookup = lookup

    async def validate(
        self,
        submitted: IdentityRecord,
        id_number: str,
    ) -> ValidationResult:
        """
        Validate an identity against the registry record for ``id_number``.

        Args:
            submitted: Fully populated identity record
            id_number: Government ID number (Aadhaar etc.)

        Returns:
            ValidationResult; never raises for lookup failures
        """
        try:
            reference = await self.lookup.fetch_reference(id_number)
        except Exception as e:
            logger.error(f"Government registry lookup failed for {id_number}: {e}")
            return ValidationResult(
                status=ValidationStatus.ERROR,
                message="Validation service temporarily unavailable",
            )

        if reference is None:
            logger.info(f"No government record for {id_number}")
            return ValidationResult(
                status=ValidationStatus.NOT_FOUND,
                message="Government record not found",
            )

        discrepancies = compare_identity(submitted, reference)
        status = (
            ValidationStatus.VERIFIED
            if not discrepancies
            else ValidationStatus.DISCREPANCIES_FOUND
        )

        logger.info(
            f"Validated identity against {id_number}: {status.value} "
            f"({len(discrepancies)} discrepancies)"
        )

        return ValidationResult(
            status=status,
            discrepancies=discrepancies,
            reference=reference,
        )
