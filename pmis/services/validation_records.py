"""
Validation Record Service
=========================

Persists government validation outcomes and approved overrides, and
keeps each prisoner's ``validation_status`` in step with the latest
record.

Author: PMIS Team
Version: 1.0.0
"""

import logging
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.schemas.validation import ValidationStatus
from pmis.db.base import utc_now
from pmis.db.models import PrisonerDB, ValidationRecordDB
from pmis.exceptions import NotFoundError
from pmis.validation.service import ValidationResult


logger = logging.getLogger(__name__)


class ValidationRecordService:
    """
    Service for validation history.

    Example:
        records = ValidationRecordService(db_session)
        await records.record_result(prisoner_id, "123456789012", result)
        latest = await records.latest(prisoner_id)
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record_result(
        self,
        prisoner_id: str,
        government_id_number: str,
        result: ValidationResult,
    ) -> ValidationRecordDB:
        """
        Store a validation outcome for a prisoner.

        Raises:
            NotFoundError: If the prisoner does not exist
        """
        prisoner = await self._get_prisoner(prisoner_id)
        record = ValidationRecordDB(
            prisoner_id=prisoner.id,
            government_id_number=government_id_number,
            validation_status=result.status.value,
            discrepancies=[d.to_dict() for d in result.discrepancies],
        )
        return await self._save(prisoner, record)

    async def record_override(
        self,
        prisoner_id: str,
        reason: str,
        approved_by: str,
        discrepancies: Sequence[Dict[str, Any]] = (),
    ) -> ValidationRecordDB:
        """
        Store an approved override of reported discrepancies.

        Raises:
            NotFoundError: If the prisoner does not exist
        """
        prisoner = await self._get_prisoner(prisoner_id)
        record = ValidationRecordDB(
            prisoner_id=prisoner.id,
            government_id_number=prisoner.government_id_number,
            validation_status=ValidationStatus.OVERRIDE_APPROVED.value,
            discrepancies=list(discrepancies),
            override_reason=reason,
            approved_by=approved_by,
            approved_at=utc_now(),
        )
        return await self._save(prisoner, record)

    async def latest(self, prisoner_id: str) -> Optional[ValidationRecordDB]:
        """
        Most recent validation record, or None if never validated.

        Raises:
            NotFoundError: If the prisoner does not exist
        """
        await self._get_prisoner(prisoner_id)
        result = await self.db.execute(
            select(ValidationRecordDB)
            .where(ValidationRecordDB.prisoner_id == prisoner_id)
            .order_by(ValidationRecordDB.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def _save(self, prisoner: PrisonerDB, record: ValidationRecordDB) -> ValidationRecordDB:
        self.db.add(record)
        prisoner.validation_status = record.validation_status
        await self.db.flush()
        await self.db.refresh(record)

        logger.info(
            f"Prisoner {prisoner.id} validation status -> {record.validation_status}"
        )
        return record

    async def _get_prisoner(self, prisoner_id: str) -> PrisonerDB:
        prisoner = await self.db.get(PrisonerDB, prisoner_id)
        if prisoner is None:
            raise NotFoundError("Prisoner", prisoner_id)
        return prisoner
