"""
PMIS Rating Schemas
===================

Periodic multi-category behavior ratings and the rating summary returned
by the trend endpoints.

Each rating event scores four categories (cooperation, discipline,
respect, work ethic) on a 1-5 scale. The overall rating is always
derived server-side from those four values.

Author: PMIS Team
Version: 1.0.0
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from shared.schemas.base import CamelModel


class Trend(str, Enum):
    """Direction of a prisoner's recent ratings versus older ones."""

    IMPROVING = "improving"
    DECLINING = "declining"
    NEUTRAL = "neutral"


class RatingPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


class RatingCreate(CamelModel):
    """
    Request: record a new rating.

    Category bounds are checked by the rating service so that an
    out-of-range value yields a 400 with a readable message.
    """
    prisoner_id: str
    cooperation: int
    discipline: int
    respect: int
    work_ethic: int
    notes: str = ""
    period: RatingPeriod = RatingPeriod.MONTHLY
    rating_date: Optional[datetime] = None


class RatingUpdate(CamelModel):
    """Request: partial update; overall rating is recomputed."""
    cooperation: Optional[int] = None
    discipline: Optional[int] = None
    respect: Optional[int] = None
    work_ethic: Optional[int] = None
    notes: Optional[str] = None
    period: Optional[RatingPeriod] = None


class RatingResponse(CamelModel):
    """A stored rating."""
    id: str
    prisoner_id: str
    cooperation: int
    discipline: int
    respect: int
    work_ethic: int
    overall_rating: float
    notes: str = ""
    period: RatingPeriod = RatingPeriod.MONTHLY
    rated_by: str
    rating_date: datetime


class CategoryAverages(CamelModel):
    cooperation: float = 0.0
    discipline: float = 0.0
    respect: float = 0.0
    work_ethic: float = 0.0


class RatingSummaryResponse(CamelModel):
    """Response: rating averages and trend for one prisoner."""
    prisoner_id: str
    total_ratings: int
    average_overall: float
    category_averages: CategoryAverages
    trend: Trend
    trend_percentage: float
    highest: float
    lowest: float
    recent_ratings: List[RatingResponse] = Field(default_factory=list)


class RatingDistributionBucket(CamelModel):
    """Count of ratings whose overall value falls in ``[lower, lower + 1)``."""
    bucket: str
    count: int


class RatingAnalyticsResponse(CamelModel):
    total_ratings: int = 0
    avg_overall: float = 0.0
    category_averages: CategoryAverages = Field(default_factory=CategoryAverages)
    max_rating: float = 0.0
    min_rating: float = 0.0
    distribution: List[RatingDistributionBucket] = Field(default_factory=list)


class TopRatedPrisoner(CamelModel):
    prisoner_id: str
    name: str
    prisoner_number: str
    average_rating: float
    total_ratings: int

