"""
Rating Service
==============

Service layer for periodic behavior ratings.

This service handles:
    - Persisting ratings with a server-computed overall rating
    - Per-prisoner rating summaries and trends
    - Facility-wide rating analytics and top-rated listing
    - Keeping each prisoner's stored overall rating current

A prisoner's stored overall rating is the mean of their most recent
``prisoner_rating_window`` (10 by default) ratings.

Author: PMIS Team
Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.schemas.ratings import (
    CategoryAverages,
    RatingAnalyticsResponse,
    RatingCreate,
    RatingDistributionBucket,
    RatingUpdate,
    TopRatedPrisoner,
)
from pmis.config import Settings
from pmis.db.base import months_ago, utc_now
from pmis.db.models import BehaviorRatingDB, PrisonerDB
from pmis.exceptions import NotFoundError, ValidationError
from pmis.scoring.ratings import (
    CATEGORIES,
    compute_overall_rating,
    compute_rating_summary,
    out_of_range_categories,
    rolling_overall_rating,
)


logger = logging.getLogger(__name__)

LIST_LIMIT = 100
RECENT_RATINGS_IN_SUMMARY = 5
DISTRIBUTION_BOUNDARIES = (1, 2, 3, 4, 5, 6)


class RatingService:
    """
    Service for managing behavior ratings.

    Example:
        service = RatingService(db_session, settings)

        rating = await service.create_rating(payload, rated_by="staff-7")
        summary = await service.summary(rating.prisoner_id)
    """

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    # =========================================================================
    # Queries
    # =========================================================================

    async def list_ratings(
        self,
        prisoner_id: Optional[str] = None,
        rated_by: Optional[str] = None,
        min_rating: Optional[float] = None,
        max_rating: Optional[float] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = LIST_LIMIT,
    ) -> List[BehaviorRatingDB]:
        """List ratings matching the filters, newest first."""
        query = select(BehaviorRatingDB)

        if prisoner_id:
            query = query.where(BehaviorRatingDB.prisoner_id == prisoner_id)
        if rated_by:
            query = query.where(BehaviorRatingDB.rated_by == rated_by)
        if min_rating is not None:
            query = query.where(BehaviorRatingDB.overall_rating >= min_rating)
        if max_rating is not None:
            query = query.where(BehaviorRatingDB.overall_rating <= max_rating)
        if start_date:
            query = query.where(BehaviorRatingDB.rating_date >= start_date)
        if end_date:
            query = query.where(BehaviorRatingDB.rating_date <= end_date)

        query = query.order_by(
            BehaviorRatingDB.rating_date.desc(),
            BehaviorRatingDB.created_at.desc(),
        ).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def summary(
        self,
        prisoner_id: str,
        months: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Rating averages and trend for one prisoner over the last ``months``.

        Returns:
            Dictionary combining the rating summary with the prisoner ID and
            the most recent ratings
        """
        months = months or self.settings.summary_default_months
        ratings = await self.list_ratings(
            prisoner_id=prisoner_id,
            start_date=months_ago(months),
            limit=None,
        )
        summary = compute_rating_summary(ratings)

        return {
            "prisoner_id": prisoner_id,
            **summary.to_dict(),
            "recent_ratings": ratings[:RECENT_RATINGS_IN_SUMMARY],
        }

    async def analytics(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> RatingAnalyticsResponse:
        """Facility-wide rating statistics and overall-rating distribution."""
        ratings = await self.list_ratings(start_date=start_date, end_date=end_date, limit=None)
        if not ratings:
            return RatingAnalyticsResponse()

        total = len(ratings)
        overall = [r.overall_rating for r in ratings]

        return RatingAnalyticsResponse(
            total_ratings=total,
            avg_overall=round(sum(overall) / total, 2),
            category_averages=CategoryAverages(**{
                name: round(sum(getattr(r, name) for r in ratings) / total, 2)
                for name in CATEGORIES
            }),
            max_rating=max(overall),
            min_rating=min(overall),
            distribution=self._distribution(overall),
        )

    async def top_rated(
        self,
        limit: int = 10,
        months: Optional[int] = None,
    ) -> List[TopRatedPrisoner]:
        """Prisoners with the highest average rating in the window."""
        months = months or self.settings.top_rated_default_months
        average = func.avg(BehaviorRatingDB.overall_rating).label("average_rating")
        count = func.count(BehaviorRatingDB.id).label("total_ratings")

        query = (
            select(PrisonerDB, average, count)
            .join(BehaviorRatingDB, BehaviorRatingDB.prisoner_id == PrisonerDB.id)
            .where(BehaviorRatingDB.rating_date >= months_ago(months))
            .group_by(PrisonerDB.id)
            .having(func.count(BehaviorRatingDB.id) >= self.settings.top_rated_min_ratings)
            .order_by(average.desc())
            .limit(limit)
        )
        result = await self.db.execute(query)

        return [
            TopRatedPrisoner(
                prisoner_id=prisoner.id,
                name=prisoner.full_name,
                prisoner_number=prisoner.prisoner_number,
                average_rating=round(float(avg_rating), 2),
                total_ratings=total_ratings,
            )
            for prisoner, avg_rating, total_ratings in result.all()
        ]

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create_rating(
        self,
        data: RatingCreate,
        rated_by: str,
    ) -> BehaviorRatingDB:
        """
        Record a rating and refresh the prisoner's overall rating.

        Raises:
            NotFoundError: If the prisoner does not exist
            ValidationError: If a category is outside [1, 5]
        """
        prisoner = await self.db.get(PrisonerDB, data.prisoner_id)
        if prisoner is None:
            raise NotFoundError("Prisoner", data.prisoner_id)

        categories = {name: getattr(data, name) for name in CATEGORIES}
        self._check_categories(categories)

        rating = BehaviorRatingDB(
            prisoner_id=prisoner.id,
            **categories,
            overall_rating=compute_overall_rating(**categories),
            notes=data.notes,
            period=data.period.value,
            rated_by=rated_by,
            rating_date=data.rating_date or utc_now(),
        )
        self.db.add(rating)
        await self.db.flush()

        await self.refresh_prisoner_rating(prisoner)
        await self.db.refresh(rating)

        logger.info(
            f"Recorded rating {rating.overall_rating} for prisoner {prisoner.id}"
        )
        return rating

    async def update_rating(self, rating_id: str, updates: RatingUpdate) -> BehaviorRatingDB:
        """
        Apply a partial update, recomputing the overall rating.

        Raises:
            NotFoundError: If the rating does not exist
            ValidationError: If a supplied category is outside [1, 5]
        """
        rating = await self._get_rating(rating_id)
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)

        self._check_categories({k: v for k, v in changes.items() if k in CATEGORIES})

        for name, value in changes.items():
            setattr(rating, name, getattr(value, "value", value))
        rating.overall_rating = compute_overall_rating(
            rating.cooperation, rating.discipline, rating.respect, rating.work_ethic
        )
        await self.db.flush()

        prisoner = await self.db.get(PrisonerDB, rating.prisoner_id)
        if prisoner is not None:
            await self.refresh_prisoner_rating(prisoner)
        await self.db.refresh(rating)

        logger.info(f"Updated rating {rating_id}: overall={rating.overall_rating}")
        return rating

    async def delete_rating(self, rating_id: str) -> None:
        """
        Delete a rating and refresh the prisoner's overall rating.

        Raises:
            NotFoundError: If the rating does not exist
        """
        rating = await self._get_rating(rating_id)
        prisoner_id = rating.prisoner_id

        await self.db.delete(rating)
        await self.db.flush()

        prisoner = await self.db.get(PrisonerDB, prisoner_id)
        if prisoner is not None:
            await self.refresh_prisoner_rating(prisoner)

        logger.info(f"Deleted rating {rating_id}")

    async def refresh_prisoner_rating(self, prisoner: PrisonerDB) -> float:
        """Recompute and store the prisoner's rolling overall rating."""
        recent = await self.list_ratings(
            prisoner_id=prisoner.id,
            limit=self.settings.prisoner_rating_window,
        )
        prisoner.overall_rating = rolling_overall_rating(recent)
        prisoner.last_rating_update = utc_now()
        await self.db.flush()
        return prisoner.overall_rating

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _check_categories(categories: Dict[str, Optional[int]]) -> None:
        invalid = out_of_range_categories(categories)
        if invalid:
            raise ValidationError(
                f"All ratings must be between 1 and 5 (invalid: {', '.join(invalid)})"
            )

    @staticmethod
    def _distribution(overall: List[float]) -> List[RatingDistributionBucket]:
        """Bucket overall ratings on integer boundaries, plus ``Other``."""
        counts: Dict[str, int] = {}
        for value in overall:
            label = "Other"
            for lower, upper in zip(DISTRIBUTION_BOUNDARIES, DISTRIBUTION_BOUNDARIES[1:]):
                if lower <= value < upper:
                    label = str(lower)
                    break
            counts[label] = counts.get(label, 0) + 1

        ordered = sorted(counts, key=lambda label: (label == "Other", label))
        return [RatingDistributionBucket(bucket=label, count=counts[label]) for label in ordered]

    async def _get_rating(self, rating_id: str) -> BehaviorRatingDB:
        rating = await self.db.get(BehaviorRatingDB, rating_id)
        if rating is None:
            raise NotFoundError("Rating", rating_id)
        return rating
