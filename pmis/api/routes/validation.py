"""
PMIS Government Validation Routes
=================================

Checks submitted prisoner identities against the government registry.
All endpoints are restricted to administrators.

Endpoints:
    POST /api/government-validation/validate               - Compare identity
    POST /api/government-validation/override               - Approve override
    GET  /api/government-validation/status/{prisoner_id}   - Latest status

Author: PMIS Team
Version: 1.0.0
"""

from fastapi import APIRouter, Depends

from shared.schemas.validation import (
    DiscrepancyModel,
    OverrideRequest,
    OverrideResponse,
    ReferenceRecordModel,
    ValidateRequest,
    ValidationResponse,
    ValidationStatus,
    ValidationStatusResponse,
)
from pmis.api.auth import CurrentUser, require_role
from pmis.api.dependencies import get_validation_record_service, get_validation_service
from pmis.logging import get_logger
from pmis.services import ValidationRecordService
from pmis.validation.labels import severity_label, status_label
from pmis.validation.service import GovernmentValidationService, identity_from_prisoner_data


router = APIRouter(prefix="/api/government-validation", tags=["Government Validation"])
logger = get_logger(__name__)

_admin = require_role("admin")


def _discrepancy(data: dict) -> DiscrepancyModel:
    model = DiscrepancyModel(**data)
    model.tone = severity_label(model.severity)
    return model


@router.post(
    "/validate",
    response_model=ValidationResponse,
    summary="Validate Against Government Records",
    description=(
        "Compare prisoner identity fields with the government registry. "
        "Branch on validationStatus: verified, discrepancies_found, not_found or error."
    ),
)
async def validate_prisoner(
    payload: ValidateRequest,
    user: CurrentUser = Depends(_admin),
    service: GovernmentValidationService = Depends(get_validation_service),
    records: ValidationRecordService = Depends(get_validation_record_service),
) -> ValidationResponse:
    identity = identity_from_prisoner_data(payload.prisoner_data)
    result = await service.validate(identity, payload.government_id_number)

    if payload.prisoner_id:
        await records.record_result(payload.prisoner_id, payload.government_id_number, result)

    logger.info(
        "government_validation",
        status=result.status.value,
        discrepancies=len(result.discrepancies),
        prisoner_id=payload.prisoner_id,
    )

    reference = None
    if result.reference is not None:
        reference = ReferenceRecordModel(
            name=result.reference.name,
            date_of_birth=result.reference.date_of_birth,
            gender=result.reference.gender,
            address=result.reference.address or "",
            father_name=result.reference.father_name,
            mother_name=result.reference.mother_name,
        )

    return ValidationResponse(
        success=result.success,
        validation_status=result.status,
        discrepancies=[_discrepancy(d.to_dict()) for d in result.discrepancies],
        government_record=reference,
        message=result.message,
        status_tone=status_label(result.status),
    )


@router.post("/override", response_model=OverrideResponse, summary="Override Discrepancies")
async def override_validation(
    payload: OverrideRequest,
    user: CurrentUser = Depends(_admin),
    records: ValidationRecordService = Depends(get_validation_record_service),
) -> OverrideResponse:
    record = await records.record_override(
        prisoner_id=payload.prisoner_id,
        reason=payload.override_reason,
        approved_by=user.user_id,
        discrepancies=[d.model_dump(mode="json", exclude={"tone"}) for d in payload.discrepancies],
    )
    return OverrideResponse(
        prisoner_id=record.prisoner_id,
        override_reason=record.override_reason,
        approved_by=record.approved_by,
        approved_at=record.approved_at,
        discrepancies=[_discrepancy(d) for d in record.discrepancies],
        status_tone=status_label(ValidationStatus.OVERRIDE_APPROVED),
    )


@router.get(
    "/status/{prisoner_id}",
    response_model=ValidationStatusResponse,
    summary="Validation Status",
)
async def validation_status(
    prisoner_id: str,
    user: CurrentUser = Depends(_admin),
    records: ValidationRecordService = Depends(get_validation_record_service),
) -> ValidationStatusResponse:
    record = await records.latest(prisoner_id)
    if record is None:
        return ValidationStatusResponse(
            prisoner_id=prisoner_id,
            validation_status=ValidationStatus.PENDING,
            is_verified=False,
            status_tone=status_label(ValidationStatus.PENDING),
        )

    status = ValidationStatus(record.validation_status)
    return ValidationStatusResponse(
        prisoner_id=prisoner_id,
        validation_status=status,
        is_verified=status in (ValidationStatus.VERIFIED, ValidationStatus.OVERRIDE_APPROVED),
        discrepancies=[_discrepancy(d) for d in record.discrepancies],
        updated_at=record.created_at,
        status_tone=status_label(status),
    )
