"""
PMIS Behavior Routes
====================

Behavior log endpoints and per-prisoner behavior summaries.

Endpoints:
    GET    /api/behavior/logs                    - Filtered log listing
    POST   /api/behavior/logs                    - Record an incident
    PUT    /api/behavior/logs/{log_id}           - Update an incident
    DELETE /api/behavior/logs/{log_id}           - Delete an incident
    GET    /api/behavior/summary/{prisoner_id}   - Counts + behavior score
    GET    /api/behavior/trends                  - Monthly counts by type

Author: PMIS Team
Version: 1.0.0
"""

from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from shared.schemas.behavior import (
    BehaviorLogCreate,
    BehaviorLogResponse,
    BehaviorLogUpdate,
    BehaviorSummaryResponse,
    BehaviorTrendPoint,
    BehaviorType,
    IncidentSeverity,
    SeverityCounts,
)
from pmis.api.auth import CurrentUser, get_current_user, require_role
from pmis.api.dependencies import get_behavior_service
from pmis.services import BehaviorService


router = APIRouter(prefix="/api/behavior", tags=["Behavior"])

_recorders = require_role("admin", "warden", "staff")


@router.get("/logs", response_model=List[BehaviorLogResponse], summary="List Behavior Logs")
async def list_logs(
    prisoner_id: Optional[str] = Query(None, alias="prisonerId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    behavior_type: Optional[BehaviorType] = Query(None, alias="behaviorType"),
    severity: Optional[IncidentSeverity] = Query(None),
    user: CurrentUser = Depends(get_current_user),
    service: BehaviorService = Depends(get_behavior_service),
) -> List[BehaviorLogResponse]:
    logs = await service.list_logs(
        prisoner_id=prisoner_id,
        start_date=start_date,
        end_date=end_date,
        behavior_type=behavior_type.value if behavior_type else None,
        severity=severity.value if severity else None,
    )
    return [BehaviorLogResponse.model_validate(log) for log in logs]


@router.get(
    "/summary/{prisoner_id}",
    response_model=BehaviorSummaryResponse,
    summary="Prisoner Behavior Summary",
    description="Incident counts and recency-weighted behavior score over the last N months.",
)
async def behavior_summary(
    prisoner_id: str,
    months: Optional[int] = Query(None, ge=1, le=120),
    user: CurrentUser = Depends(get_current_user),
    service: BehaviorService = Depends(get_behavior_service),
) -> BehaviorSummaryResponse:
    summary = await service.summary(prisoner_id, months=months)
    return BehaviorSummaryResponse(
        prisoner_id=summary["prisoner_id"],
        total_incidents=summary["total_incidents"],
        positive=summary["positive"],
        negative=summary["negative"],
        neutral=summary["neutral"],
        by_severity=SeverityCounts(**summary["by_severity"]),
        recent_logs=[BehaviorLogResponse.model_validate(log) for log in summary["recent_logs"]],
        behavior_score=summary["behavior_score"],
    )


@router.post(
    "/logs",
    response_model=BehaviorLogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record Behavior Incident",
)
async def create_log(
    payload: BehaviorLogCreate,
    user: CurrentUser = Depends(_recorders),
    service: BehaviorService = Depends(get_behavior_service),
) -> BehaviorLogResponse:
    log = await service.create_log(payload, recorded_by=user.user_id)
    return BehaviorLogResponse.model_validate(log)


@router.put("/logs/{log_id}", response_model=BehaviorLogResponse, summary="Update Behavior Log")
async def update_log(
    log_id: str,
    payload: BehaviorLogUpdate,
    user: CurrentUser = Depends(_recorders),
    service: BehaviorService = Depends(get_behavior_service),
) -> BehaviorLogResponse:
    log = await service.update_log(log_id, payload)
    return BehaviorLogResponse.model_validate(log)


@router.delete("/logs/{log_id}", summary="Delete Behavior Log")
async def delete_log(
    log_id: str,
    user: CurrentUser = Depends(_recorders),
    service: BehaviorService = Depends(get_behavior_service),
) -> Dict[str, str]:
    await service.delete_log(log_id)
    return {"message": "Behavior log deleted successfully"}


@router.get("/trends", response_model=List[BehaviorTrendPoint], summary="Behavior Trends")
async def behavior_trends(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    user: CurrentUser = Depends(get_current_user),
    service: BehaviorService = Depends(get_behavior_service),
) -> List[BehaviorTrendPoint]:
    return await service.trends(start_date=start_date, end_date=end_date)
