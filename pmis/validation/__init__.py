"""
PMIS Government Validation Package
==================================

Identity checks against the government registry.

This package provides:
    - engine: pure field-by-field discrepancy detection
    - registry: reference lookup protocol and in-memory registry
    - service: validation status orchestration
    - labels: presentation tones for statuses and severities

Author: PMIS Team
Version: 1.0.0
"""

from pmis.validation.engine import Discrepancy, IdentityRecord, compare_identity
from pmis.validation.registry import InMemoryReferenceRegistry, ReferenceLookup
from pmis.validation.service import (
    GovernmentValidationService,
    ValidationResult,
    identity_from_prisoner_data,
)

__all__ = [
    "Discrepancy",
    "IdentityRecord",
    "compare_identity",
    "InMemoryReferenceRegistry",
    "ReferenceLookup",
    "GovernmentValidationService",
    "ValidationResult",
    "identity_from_prisoner_data",
]
