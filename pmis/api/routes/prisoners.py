"""
PMIS Prisoner Routes
====================

Prisoner record endpoints.

Endpoints:
    POST /api/prisoners                - Admit a prisoner (admin, warden)
    GET  /api/prisoners                - List prisoners
    GET  /api/prisoners/{prisoner_id}  - Get one prisoner

Author: PMIS Team
Version: 1.0.0
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from shared.schemas.prisoners import PrisonerCreate, PrisonerResponse, PrisonerStatus
from pmis.api.auth import CurrentUser, get_current_user, require_role
from pmis.api.dependencies import get_prisoner_service
from pmis.services import PrisonerService


router = APIRouter(prefix="/api/prisoners", tags=["Prisoners"])


@router.post(
    "",
    response_model=PrisonerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Admit Prisoner",
)
async def create_prisoner(
    payload: PrisonerCreate,
    user: CurrentUser = Depends(require_role("admin", "warden")),
    service: PrisonerService = Depends(get_prisoner_service),
) -> PrisonerResponse:
    prisoner = await service.create(payload)
    return PrisonerResponse.model_validate(prisoner)


@router.get("", response_model=List[PrisonerResponse], summary="List Prisoners")
async def list_prisoners(
    status_filter: Optional[PrisonerStatus] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user: CurrentUser = Depends(get_current_user),
    service: PrisonerService = Depends(get_prisoner_service),
) -> List[PrisonerResponse]:
    prisoners = await service.list(
        status=status_filter.value if status_filter else None,
        limit=limit,
        offset=offset,
    )
    return [PrisonerResponse.model_validate(p) for p in prisoners]


@router.get("/{prisoner_id}", response_model=PrisonerResponse, summary="Get Prisoner")
async def get_prisoner(
    prisoner_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: PrisonerService = Depends(get_prisoner_service),
) -> PrisonerResponse:
    prisoner = await service.get(prisoner_id)
    return PrisonerResponse.model_validate(prisoner)
