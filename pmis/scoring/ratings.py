"""
PMIS Rating Trend Engine
========================

Aggregates periodic multi-category ratings into averages and a trend
classification.

Trend Rules:
    - The newest ``ceil(n / 3)`` ratings form the recent window and the
      oldest ``ceil(n / 3)`` ratings form the older window.
    - ``diff = mean(recent overall) - mean(older overall)``
    - improving if diff > 0.3, declining if diff < -0.3, else neutral.
    - ``trend_percentage = round(diff * 20, 1)``

With a single rating both windows are that same record, so the diff is
0 and the trend is neutral. There is no separate "insufficient data"
outcome; two ratings already compare newest against oldest.

Author: PMIS Team
Version: 1.0.0
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from shared.schemas.ratings import Trend


logger = logging.getLogger(__name__)


MIN_CATEGORY_RATING = 1
MAX_CATEGORY_RATING = 5
TREND_THRESHOLD = 0.3
TREND_PERCENT_SCALE = 20

CATEGORIES = ("cooperation", "discipline", "respect", "work_ethic")


@dataclass(frozen=True)
class RatingRecord:
    """One rating event. ``overall_rating`` is derived from the categories."""
    cooperation: int
    discipline: int
    respect: int
    work_ethic: int
    overall_rating: float
    rating_date: Optional[datetime] = None

    @classmethod
    def from_categories(
        cls,
        cooperation: int,
        discipline: int,
        respect: int,
        work_ethic: int,
        rating_date: Optional[datetime] = None,
    ) -> "RatingRecord":
        return cls(
            cooperation=cooperation,
            discipline=discipline,
            respect=respect,
            work_ethic=work_ethic,
            overall_rating=compute_overall_rating(
                cooperation, discipline, respect, work_ethic
            ),
            rating_date=rating_date,
        )


@dataclass
class RatingSummary:
    """
    Aggregate over a window of ratings.

    All averages are rounded to 2 decimals. ``highest``/``lowest`` are the
    extreme overall ratings in the window.
    """
    total_ratings: int = 0
    average_overall: float = 0.0
    category_averages: Dict[str, float] = field(
        default_factory=lambda: {c: 0.0 for c in CATEGORIES}
    )
    trend: Trend = Trend.NEUTRAL
    trend_percentage: float = 0.0
    highest: float = 0.0
    lowest: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_ratings": self.total_ratings,
            "average_overall": self.average_overall,
            "category_averages": dict(self.category_averages),
            "trend": self.trend,
            "trend_percentage": self.trend_percentage,
            "highest": self.highest,
            "lowest": self.lowest,
        }


def compute_overall_rating(
    cooperation: int,
    discipline: int,
    respect: int,
    work_ethic: int,
) -> float:
    """Mean of the four category scores, rounded to 2 decimals."""
    return round((cooperation + discipline + respect + work_ethic) / 4, 2)


def out_of_range_categories(values: Dict[str, Optional[int]]) -> List[str]:
    """Names of supplied category values outside [1, 5]."""
    return [
        name for name, value in values.items()
        if value is not None
        and not MIN_CATEGORY_RATING <= value <= MAX_CATEGORY_RATING
    ]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def classify_trend(diff: float) -> Trend:
    """Map a recent-minus-older difference to a trend."""
    if diff > TREND_THRESHOLD:
        return Trend.IMPROVING
    if diff < -TREND_THRESHOLD:
        return Trend.DECLINING
    return Trend.NEUTRAL


def compute_rating_summary(ratings: Sequence[Any]) -> RatingSummary:
    """
    Summarize ratings ordered newest first.

    Args:
        ratings: Sequence of objects exposing the four category scores and
            ``overall_rating``, newest first

    Returns:
        RatingSummary; a zero-valued neutral summary for empty input
    """
    total = len(ratings)
    if total == 0:
        return RatingSummary()

    overall = [r.overall_rating for r in ratings]

    window = math.ceil(total / 3)
    recent_avg = _mean(overall[:window])
    older_avg = _mean(overall[-window:])
    trend_diff = recent_avg - older_avg

    summary = RatingSummary(
        total_ratings=total,
        average_overall=round(_mean(overall), 2),
        category_averages={
            name: round(_mean([getattr(r, name) for r in ratings]), 2)
            for name in CATEGORIES
        },
        trend=classify_trend(trend_diff),
        trend_percentage=round(trend_diff * TREND_PERCENT_SCALE, 1),
        highest=max(overall),
        lowest=min(overall),
    )

    logger.debug(
        f"Rating summary over {total} ratings: avg={summary.average_overall} "
        f"trend={summary.trend.value} ({summary.trend_percentage})"
    )
    return summary


def rolling_overall_rating(ratings: Sequence[Any]) -> float:
    """Mean overall rating of the supplied ratings, 0 when empty."""
    return round(_mean([r.overall_rating for r in ratings]), 2)
