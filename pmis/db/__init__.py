"""
PMIS Database Layer
===================

Relational persistence using SQLAlchemy 2.0 async.

This module provides:
    - Database: engine and session factory owner
    - get_db: request-scoped session dependency
    - Base model class and ORM tables

Usage:
    from pmis.db import get_db, AsyncSession

    async def my_endpoint(db: AsyncSession = Depends(get_db)):
        result = await db.execute(select(PrisonerDB))
        ...

Author: PMIS Team
Version: 1.0.0
"""

from sqlalchemy.ext.asyncio import AsyncSession

from pmis.db.base import Base
from pmis.db.models import (
    BehaviorLogDB,
    BehaviorRatingDB,
    PrisonerDB,
    ValidationRecordDB,
)
from pmis.db.session import Database, get_db

__all__ = [
    "AsyncSession",
    "Base",
    "BehaviorLogDB",
    "BehaviorRatingDB",
    "PrisonerDB",
    "ValidationRecordDB",
    "Database",
    "get_db",
]
