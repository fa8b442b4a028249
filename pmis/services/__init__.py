"""
PMIS Service Layer
==================

Database-backed services that feed the scoring and validation engines
and persist their results.

Author: PMIS Team
Version: 1.0.0
"""

from pmis.services.behavior import BehaviorService
from pmis.services.prisoners import PrisonerService
from pmis.services.ratings import RatingService
from pmis.services.validation_records import ValidationRecordService

__all__ = [
    "BehaviorService",
    "PrisonerService",
    "RatingService",
    "ValidationRecordService",
]
