"""
Behavior Service
================

Service layer for behavior logs.

This service handles:
    - Persisting and querying behavior incidents
    - Per-prisoner behavior summaries
    - Monthly incident trends
    - Keeping each prisoner's stored behavior score current

Every mutation rescores the affected prisoner from their most recent
incidents (``behavior_score_window``, 50 by default).

Author: PMIS Team
Version: 1.0.0
"""

import logging
from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.schemas.behavior import (
    BehaviorLogCreate,
    BehaviorLogUpdate,
    BehaviorTrendPoint,
)
from pmis.config import Settings
from pmis.db.base import months_ago, utc_now
from pmis.db.models import BehaviorLogDB, PrisonerDB
from pmis.exceptions import NotFoundError
from pmis.scoring.behavior import compute_behavior_score, tally_incidents


logger = logging.getLogger(__name__)

RECENT_LOGS_IN_SUMMARY = 10


class BehaviorService:
    """
    Service for managing behavior logs.

    Example:
        service = BehaviorService(db_session, settings)

        log = await service.create_log(payload, recorded_by="warden-1")
        summary = await service.summary(log.prisoner_id, months=6)
    """

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    # =========================================================================
    # Queries
    # =========================================================================

    async def list_logs(
        self,
        prisoner_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        behavior_type: Optional[str] = None,
        severity: Optional[str] = None,
    ) -> List[BehaviorLogDB]:
        """List behavior logs matching the filters, newest first."""
        query = select(BehaviorLogDB)

        if prisoner_id:
            query = query.where(BehaviorLogDB.prisoner_id == prisoner_id)
        if behavior_type:
            query = query.where(BehaviorLogDB.behavior_type == behavior_type)
        if severity:
            query = query.where(BehaviorLogDB.severity == severity)
        if start_date:
            query = query.where(BehaviorLogDB.date >= start_date)
        if end_date:
            query = query.where(BehaviorLogDB.date <= end_date)

        query = query.order_by(BehaviorLogDB.date.desc(), BehaviorLogDB.created_at.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def summary(
        self,
        prisoner_id: str,
        months: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Behavior statistics for one prisoner over the last ``months``.

        Returns:
            Dictionary with counts by type and severity, the most recent
            logs, and the behavior score of the window
        """
        months = months or self.settings.summary_default_months
        logs = await self.list_logs(
            prisoner_id=prisoner_id,
            start_date=months_ago(months),
        )
        tally = tally_incidents(logs)

        return {
            "prisoner_id": prisoner_id,
            "total_incidents": tally.total,
            "positive": tally.by_type["positive"],
            "negative": tally.by_type["negative"],
            "neutral": tally.by_type["neutral"],
            "by_severity": tally.by_severity,
            "recent_logs": logs[:RECENT_LOGS_IN_SUMMARY],
            "behavior_score": compute_behavior_score(logs),
        }

    async def trends(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[BehaviorTrendPoint]:
        """Incident counts per (year, month, behavior type), oldest first."""
        query = select(BehaviorLogDB.date, BehaviorLogDB.behavior_type)
        if start_date:
            query = query.where(BehaviorLogDB.date >= start_date)
        if end_date:
            query = query.where(BehaviorLogDB.date <= end_date)

        result = await self.db.execute(query)
        counts: Counter = Counter(
            (logged_at.year, logged_at.month, behavior_type)
            for logged_at, behavior_type in result.all()
        )

        return [
            BehaviorTrendPoint(year=year, month=month, behavior_type=behavior_type, count=count)
            for (year, month, behavior_type), count in sorted(counts.items())
        ]

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create_log(
        self,
        data: BehaviorLogCreate,
        recorded_by: str,
    ) -> BehaviorLogDB:
        """
        Record a behavior incident and rescore the prisoner.

        Raises:
            NotFoundError: If the prisoner does not exist
        """
        prisoner = await self._get_prisoner(data.prisoner_id)

        log = BehaviorLogDB(
            prisoner_id=prisoner.id,
            behavior_type=data.behavior_type.value,
            severity=data.severity.value,
            description=data.description,
            location=data.location,
            date=data.date or utc_now(),
            witnesses=list(data.witnesses),
            action_taken=data.action_taken,
            recorded_by=recorded_by,
        )
        self.db.add(log)
        await self.db.flush()

        await self.refresh_behavior_score(prisoner)
        await self.db.refresh(log)

        logger.info(
            f"Recorded {log.behavior_type}/{log.severity} incident for prisoner {prisoner.id}"
        )
        return log

    async def update_log(self, log_id: str, updates: BehaviorLogUpdate) -> BehaviorLogDB:
        """
        Apply a partial update and rescore the prisoner.

        Raises:
            NotFoundError: If the log does not exist
        """
        log = await self._get_log(log_id)

        # Columns are non-nullable; null means "leave as is", "" or [] clears.
        for name, value in updates.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(log, name, getattr(value, "value", value))
        await self.db.flush()

        prisoner = await self.db.get(PrisonerDB, log.prisoner_id)
        if prisoner is not None:
            await self.refresh_behavior_score(prisoner)
        await self.db.refresh(log)

        logger.info(f"Updated behavior log {log_id}")
        return log

    async def delete_log(self, log_id: str) -> None:
        """
        Delete a log and rescore the prisoner.

        Raises:
            NotFoundError: If the log does not exist
        """
        log = await self._get_log(log_id)
        prisoner_id = log.prisoner_id

        await self.db.delete(log)
        await self.db.flush()

        prisoner = await self.db.get(PrisonerDB, prisoner_id)
        if prisoner is not None:
            await self.refresh_behavior_score(prisoner)

        logger.info(f"Deleted behavior log {log_id}")

    async def refresh_behavior_score(self, prisoner: PrisonerDB) -> int:
        """Recompute and store the prisoner's behavior score."""
        result = await self.db.execute(
            select(BehaviorLogDB)
            .where(BehaviorLogDB.prisoner_id == prisoner.id)
            .order_by(BehaviorLogDB.date.desc(), BehaviorLogDB.created_at.desc())
            .limit(self.settings.behavior_score_window)
        )
        logs = list(result.scalars().all())

        prisoner.behavior_score = compute_behavior_score(logs)
        prisoner.last_behavior_update = utc_now()
        await self.db.flush()

        logger.debug(
            f"Prisoner {prisoner.id} behavior score={prisoner.behavior_score} "
            f"from {len(logs)} logs"
        )
        return prisoner.behavior_score

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _get_prisoner(self, prisoner_id: str) -> PrisonerDB:
        prisoner = await self.db.get(PrisonerDB, prisoner_id)
        if prisoner is None:
            raise NotFoundError("Prisoner", prisoner_id)
        return prisoner

    async def _get_log(self, log_id: str) -> BehaviorLogDB:
        log = await self.db.get(BehaviorLogDB, log_id)
        if log is None:
            raise NotFoundError("Behavior log", log_id)
        return log
