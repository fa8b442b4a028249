"""
Prisoner Service
================

CRUD for prisoner records. Derived conduct fields (behavior score,
overall rating, validation status) are maintained by the behavior,
rating and validation services, not written here.

Author: PMIS Team
Version: 1.0.0
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.schemas.prisoners import PrisonerCreate
from pmis.db.models import PrisonerDB
from pmis.exceptions import ConflictError, NotFoundError


logger = logging.getLogger(__name__)


class PrisonerService:
    """
    Service for prisoner records.

    Example:
        service = PrisonerService(db_session)
        prisoner = await service.create(payload)
        same = await service.get(prisoner.id)
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: PrisonerCreate) -> PrisonerDB:
        """
        Create a prisoner.

        Raises:
            ConflictError: If the prisoner number is already in use
        """
        existing = await self.db.execute(
            select(PrisonerDB.id).where(PrisonerDB.prisoner_number == data.prisoner_number)
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(f"Prisoner number already exists: {data.prisoner_number}")

        address = data.address
        prisoner = PrisonerDB(
            prisoner_number=data.prisoner_number,
            first_name=data.first_name,
            middle_name=data.middle_name,
            last_name=data.last_name,
            date_of_birth=data.date_of_birth,
            gender=data.gender.value,
            address_street=address.street,
            address_city=address.city,
            address_state=address.state,
            address_pincode=address.pincode,
            address_country=address.country or "India",
            government_id_number=data.government_id_number,
            security_level=data.security_level.value,
        )

        self.db.add(prisoner)
        await self.db.flush()
        await self.db.refresh(prisoner)

        logger.info(f"Created prisoner: {prisoner.prisoner_number} ({prisoner.id})")
        return prisoner

    async def get(self, prisoner_id: str) -> PrisonerDB:
        """
        Get a prisoner by ID.

        Raises:
            NotFoundError: If no such prisoner exists
        """
        prisoner = await self.db.get(PrisonerDB, prisoner_id)
        if prisoner is None:
            raise NotFoundError("Prisoner", prisoner_id)
        return prisoner

    async def list(
        self,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[PrisonerDB]:
        """List prisoners ordered by prisoner number."""
        query = select(PrisonerDB)
        if status:
            query = query.where(PrisonerDB.status == status)
        query = query.order_by(PrisonerDB.prisoner_number).offset(offset).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())
