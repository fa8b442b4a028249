"""
PMIS Prisoner Schemas
=====================

Prisoner record request/response models.

Author: PMIS Team
Version: 1.0.0
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from shared.schemas.base import CamelModel
from shared.schemas.validation import AddressModel, Gender, ValidationStatus


class SecurityLevel(str, Enum):
    MINIMUM = "minimum"
    MEDIUM = "medium"
    MAXIMUM = "maximum"
    SUPERMAX = "supermax"


class PrisonerStatus(str, Enum):
    ACTIVE = "active"
    RELEASED = "released"
    TRANSFERRED = "transferred"
    DECEASED = "deceased"
    ESCAPED = "escaped"


class PrisonerCreate(CamelModel):
    prisoner_number: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    middle_name: Optional[str] = None
    last_name: str = Field(..., min_length=1)
    date_of_birth: date
    gender: Gender
    address: AddressModel = Field(default_factory=AddressModel)
    government_id_number: Optional[str] = None
    security_level: SecurityLevel = SecurityLevel.MEDIUM


class PrisonerResponse(CamelModel):
    id: str
    prisoner_number: str
    first_name: str
    middle_name: Optional[str] = None
    last_name: str
    full_name: str
    date_of_birth: date
    gender: Gender
    address: AddressModel
    government_id_number: Optional[str] = None
    security_level: SecurityLevel
    status: PrisonerStatus
    behavior_score: int
    overall_rating: float
    validation_status: ValidationStatus
    last_behavior_update: Optional[datetime] = None
    last_rating_update: Optional[datetime] = None
