"""
PMIS API Dependencies
=====================

FastAPI dependency injection for shared resources.

The ``ServiceContainer`` is built by the application factory and kept on
``app.state``; route dependencies read it from the request so each
application instance (and each test) owns its own database and
government registry.

Author: PMIS Team
Version: 1.0.0
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pmis.config import Settings
from pmis.db.session import Database, get_db
from pmis.services import (
    BehaviorService,
    PrisonerService,
    RatingService,
    ValidationRecordService,
)
from pmis.validation.registry import InMemoryReferenceRegistry, ReferenceLookup
from pmis.validation.service import GovernmentValidationService


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Per-application container for shared services.

    Manages the lifecycle of the database and the government
    validation service.
    """

    def __init__(
        self,
        settings: Settings,
        reference_lookup: Optional[ReferenceLookup] = None,
    ):
        self.settings = settings
        self.database = Database(settings.database_url, echo=settings.debug)
        self.reference_lookup = reference_lookup or InMemoryReferenceRegistry(
            latency_seconds=settings.reference_lookup_latency_seconds,
        )
        self.validation_service = GovernmentValidationService(self.reference_lookup)
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize all services."""
        if self._initialized:
            return
        logger.info("Initializing service container...")
        await self.database.init()
        self._initialized = True
        logger.info("Service container initialized")

    async def shutdown(self) -> None:
        """Shutdown all services."""
        logger.info("Shutting down service container...")
        await self.database.close()
        self._initialized = False
        logger.info("Service container shutdown complete")


# Dependency functions for FastAPI
def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_settings_dep(container: ServiceContainer = Depends(get_container)) -> Settings:
    return container.settings


def get_validation_service(
    container: ServiceContainer = Depends(get_container),
) -> GovernmentValidationService:
    return container.validation_service


def get_prisoner_service(db: AsyncSession = Depends(get_db)) -> PrisonerService:
    return PrisonerService(db)


def get_behavior_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
) -> BehaviorService:
    return BehaviorService(db, settings)


def get_rating_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
) -> RatingService:
    return RatingService(db, settings)


def get_validation_record_service(
    db: AsyncSession = Depends(get_db),
) -> ValidationRecordService:
    return ValidationRecordService(db)
