"""
PMIS Government Validation Schemas
==================================

Wire models for checking a prisoner's submitted identity against the
government registry.

Key Components:
    - ValidationStatus: outcome of a validation request
    - DiscrepancySeverity: minor / major / critical
    - DiscrepancyModel: one field-level mismatch
    - ValidateRequest / ValidationResponse: /validate endpoint contract

Response models carry display tones (statusTone, discrepancy tone) for the
UI to render as colors.

Author: PMIS Team
Version: 1.0.0
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from shared.schemas.base import CamelModel


class ValidationStatus(str, Enum):
    """
    Validation outcome.

    ``verified``, ``discrepancies_found``, ``not_found`` and ``error`` are
    produced by the validation service; ``pending`` and
    ``override_approved`` are record-keeping states.
    """

    PENDING = "pending"
    VERIFIED = "verified"
    DISCREPANCIES_FOUND = "discrepancies_found"
    NOT_FOUND = "not_found"
    ERROR = "error"
    OVERRIDE_APPROVED = "override_approved"


class DiscrepancySeverity(str, Enum):
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class AddressModel(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: Optional[str] = None


class PrisonerIdentityData(CamelModel):
    """Identity fields as entered on the prisoner intake form."""
    first_name: str = Field(..., min_length=1)
    middle_name: Optional[str] = None
    last_name: str = Field(..., min_length=1)
    date_of_birth: date
    gender: Gender
    address: Optional[AddressModel] = None


class DiscrepancyModel(CamelModel):
    field: str
    provided_value: Optional[str] = None
    government_value: Optional[str] = None
    severity: DiscrepancySeverity
    notes: str = ""
    tone: Optional[str] = Field(None, description="Display tone, filled in on responses")


class ReferenceRecordModel(CamelModel):
    """Registry-held identity returned alongside a completed comparison."""
    name: str
    date_of_birth: date
    gender: Gender
    address: str = ""
    father_name: Optional[str] = None
    mother_name: Optional[str] = None


class ValidateRequest(CamelModel):
    prisoner_data: PrisonerIdentityData
    government_id_number: str = Field(..., min_length=1)
    prisoner_id: Optional[str] = None


class ValidationResponse(CamelModel):
    success: bool
    validation_status: ValidationStatus
    discrepancies: List[DiscrepancyModel] = Field(default_factory=list)
    government_record: Optional[ReferenceRecordModel] = None
    message: Optional[str] = None
    status_tone: str = "neutral"


class OverrideRequest(CamelModel):
    prisoner_id: str
    override_reason: str = Field(..., min_length=1)
    discrepancies: List[DiscrepancyModel] = Field(default_factory=list)


class OverrideResponse(CamelModel):
    prisoner_id: str
    validation_status: ValidationStatus = ValidationStatus.OVERRIDE_APPROVED
    override_reason: str
    approved_by: str
    approved_at: datetime
    discrepancies: List[DiscrepancyModel] = Field(default_factory=list)
    status_tone: str = "info"


class ValidationStatusResponse(CamelModel):
    prisoner_id: str
    validation_status: ValidationStatus
    is_verified: bool
    discrepancies: List[DiscrepancyModel] = Field(default_factory=list)
    updated_at: Optional[datetime] = None
    status_tone: str = "neutral"
