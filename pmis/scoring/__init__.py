"""
PMIS Scoring Package
====================

Pure scoring engines for prisoner conduct.

This package provides:
    - behavior: recency-weighted behavior score (0-100)
    - ratings: rating averages and trend classification

Author: PMIS Team
Version: 1.0.0
"""

from pmis.scoring.behavior import BehaviorIncident, compute_behavior_score
from pmis.scoring.ratings import (
    RatingRecord,
    RatingSummary,
    compute_overall_rating,
    compute_rating_summary,
)

__all__ = [
    "BehaviorIncident",
    "compute_behavior_score",
    "RatingRecord",
    "RatingSummary",
    "compute_overall_rating",
    "compute_rating_summary",
]
