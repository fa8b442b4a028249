"""
PMIS Shared Schemas Package
===========================

Wire schemas shared by the PMIS API and its clients. All models
serialize with camelCase field names.

This package provides:
    - Behavior log schemas and enumerations
    - Behavior rating schemas and rating summary
    - Government validation request/response schemas
    - Prisoner and health schemas

Author: PMIS Team
Version: 1.0.0
"""

from shared.schemas.base import CamelModel

from shared.schemas.behavior import (
    BehaviorType,
    IncidentSeverity,
    LogStatus,
    BehaviorLogCreate,
    BehaviorLogUpdate,
    BehaviorLogResponse,
    BehaviorSummaryResponse,
    BehaviorTrendPoint,
)

from shared.schemas.ratings import (
    Trend,
    RatingPeriod,
    RatingCreate,
    RatingUpdate,
    RatingResponse,
    RatingSummaryResponse,
    RatingAnalyticsResponse,
    TopRatedPrisoner,
)

from shared.schemas.validation import (
    ValidationStatus,
    DiscrepancySeverity,
    Gender,
    DiscrepancyModel,
    ValidateRequest,
    ValidationResponse,
)

from shared.schemas.prisoners import (
    PrisonerCreate,
    PrisonerResponse,
)

__all__ = [
    "CamelModel",
    # Behavior
    "BehaviorType",
    "IncidentSeverity",
    "LogStatus",
    "BehaviorLogCreate",
    "BehaviorLogUpdate",
    "BehaviorLogResponse",
    "BehaviorSummaryResponse",
    "BehaviorTrendPoint",
    # Ratings
    "Trend",
    "RatingPeriod",
    "RatingCreate",
    "RatingUpdate",
    "RatingResponse",
    "RatingSummaryResponse",
    "RatingAnalyticsResponse",
    "TopRatedPrisoner",
    # Validation
    "ValidationStatus",
    "DiscrepancySeverity",
    "Gender",
    "DiscrepancyModel",
    "ValidateRequest",
    "ValidationResponse",
    # Prisoners
    "PrisonerCreate",
    "PrisonerResponse",
]
