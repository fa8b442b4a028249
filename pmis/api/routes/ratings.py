"""
PMIS Rating Routes
==================

Behavior rating endpoints, per-prisoner trend summaries and
facility-wide analytics.

Endpoints:
    GET    /api/ratings                         - Filtered rating listing
    POST   /api/ratings                         - Record a rating
    PUT    /api/ratings/{rating_id}             - Update a rating
    DELETE /api/ratings/{rating_id}             - Delete a rating
    GET    /api/ratings/summary/{prisoner_id}   - Averages + trend
    GET    /api/ratings/analytics               - Facility statistics
    GET    /api/ratings/top-rated               - Highest average ratings

Author: PMIS Team
Version: 1.0.0
"""

from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from shared.schemas.ratings import (
    CategoryAverages,
    RatingAnalyticsResponse,
    RatingCreate,
    RatingResponse,
    RatingSummaryResponse,
    RatingUpdate,
    TopRatedPrisoner,
)
from pmis.api.auth import CurrentUser, get_current_user, require_role
from pmis.api.dependencies import get_rating_service
from pmis.services import RatingService


router = APIRouter(prefix="/api/ratings", tags=["Ratings"])

_raters = require_role("admin", "warden", "staff")


@router.get("", response_model=List[RatingResponse], summary="List Ratings")
async def list_ratings(
    prisoner_id: Optional[str] = Query(None, alias="prisonerId"),
    rated_by: Optional[str] = Query(None, alias="ratedBy"),
    min_rating: Optional[float] = Query(None, alias="minRating", ge=1, le=5),
    max_rating: Optional[float] = Query(None, alias="maxRating", ge=1, le=5),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    user: CurrentUser = Depends(get_current_user),
    service: RatingService = Depends(get_rating_service),
) -> List[RatingResponse]:
    ratings = await service.list_ratings(
        prisoner_id=prisoner_id,
        rated_by=rated_by,
        min_rating=min_rating,
        max_rating=max_rating,
        start_date=start_date,
        end_date=end_date,
    )
    return [RatingResponse.model_validate(r) for r in ratings]


@router.get(
    "/summary/{prisoner_id}",
    response_model=RatingSummaryResponse,
    summary="Prisoner Rating Summary",
    description="Category averages and recent-vs-older trend over the last N months.",
)
async def rating_summary(
    prisoner_id: str,
    months: Optional[int] = Query(None, ge=1, le=120),
    user: CurrentUser = Depends(get_current_user),
    service: RatingService = Depends(get_rating_service),
) -> RatingSummaryResponse:
    summary = await service.summary(prisoner_id, months=months)
    return RatingSummaryResponse(
        prisoner_id=summary["prisoner_id"],
        total_ratings=summary["total_ratings"],
        average_overall=summary["average_overall"],
        category_averages=CategoryAverages(**summary["category_averages"]),
        trend=summary["trend"],
        trend_percentage=summary["trend_percentage"],
        highest=summary["highest"],
        lowest=summary["lowest"],
        recent_ratings=[RatingResponse.model_validate(r) for r in summary["recent_ratings"]],
    )


@router.get("/analytics", response_model=RatingAnalyticsResponse, summary="Rating Analytics")
async def rating_analytics(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    user: CurrentUser = Depends(get_current_user),
    service: RatingService = Depends(get_rating_service),
) -> RatingAnalyticsResponse:
    return await service.analytics(start_date=start_date, end_date=end_date)


@router.get("/top-rated", response_model=List[TopRatedPrisoner], summary="Top Rated Prisoners")
async def top_rated(
    limit: int = Query(10, ge=1, le=100),
    months: Optional[int] = Query(None, ge=1, le=120),
    user: CurrentUser = Depends(get_current_user),
    service: RatingService = Depends(get_rating_service),
) -> List[TopRatedPrisoner]:
    return await service.top_rated(limit=limit, months=months)


@router.post(
    "",
    response_model=RatingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record Rating",
)
async def create_rating(
    payload: RatingCreate,
    user: CurrentUser = Depends(_raters),
    service: RatingService = Depends(get_rating_service),
) -> RatingResponse:
    rating = await service.create_rating(payload, rated_by=user.user_id)
    return RatingResponse.model_validate(rating)


@router.put("/{rating_id}", response_model=RatingResponse, summary="Update Rating")
async def update_rating(
    rating_id: str,
    payload: RatingUpdate,
    user: CurrentUser = Depends(_raters),
    service: RatingService = Depends(get_rating_service),
) -> RatingResponse:
    rating = await service.update_rating(rating_id, payload)
    return RatingResponse.model_validate(rating)


@router.delete("/{rating_id}", summary="Delete Rating")
async def delete_rating(
    rating_id: str,
    user: CurrentUser = Depends(_raters),
    service: RatingService = Depends(get_rating_service),
) -> Dict[str, str]:
    await service.delete_rating(rating_id)
    return {"message": "Rating deleted successfully"}
