"""
PMIS Database Models
====================

ORM tables for prisoners, behavior logs, behavior ratings and
government validation records.

Author: PMIS Team
Version: 1.0.0
"""

from datetime import date, datetime
from typing import Any, List, Optional

from sqlalchemy import JSON, Date, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pmis.db.base import Base, TimestampMixin, generate_uuid, utc_now


class PrisonerDB(TimestampMixin, Base):
    """A prisoner record with derived conduct fields."""

    __tablename__ = "prisoners"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    prisoner_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)

    address_street: Mapped[Optional[str]] = mapped_column(String(255))
    address_city: Mapped[Optional[str]] = mapped_column(String(100))
    address_state: Mapped[Optional[str]] = mapped_column(String(100))
    address_pincode: Mapped[Optional[str]] = mapped_column(String(20))
    address_country: Mapped[Optional[str]] = mapped_column(String(100), default="India")

    government_id_number: Mapped[Optional[str]] = mapped_column(String(32))
    security_level: Mapped[str] = mapped_column(String(20), default="medium", nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)

    behavior_score: Mapped[int] = mapped_column(Integer, default=50, nullable=False)
    overall_rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    validation_status: Mapped[str] = mapped_column(String(32), default="pending", nullable=False)
    last_behavior_update: Mapped[Optional[datetime]] = mapped_column()
    last_rating_update: Mapped[Optional[datetime]] = mapped_column()

    @property
    def full_name(self) -> str:
        return " ".join(
            part for part in (self.first_name, self.middle_name, self.last_name) if part
        )

    @property
    def address(self) -> dict[str, Any]:
        return {
            "street": self.address_street,
            "city": self.address_city,
            "state": self.address_state,
            "pincode": self.address_pincode,
            "country": self.address_country,
        }


class BehaviorLogDB(TimestampMixin, Base):
    """One recorded behavior incident."""

    __tablename__ = "behavior_logs"
    __table_args__ = (
        Index("ix_behavior_logs_prisoner_date", "prisoner_id", "date"),
        Index("ix_behavior_logs_type_severity", "behavior_type", "severity"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    prisoner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("prisoners.id", ondelete="CASCADE"), nullable=False
    )
    behavior_type: Mapped[str] = mapped_column(String(10), nullable=False)
    severity: Mapped[str] = mapped_column(String(10), default="medium", nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime] = mapped_column(default=utc_now, nullable=False)
    witnesses: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    action_taken: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    recorded_by: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)


class BehaviorRatingDB(TimestampMixin, Base):
    """One periodic four-category rating."""

    __tablename__ = "behavior_ratings"
    __table_args__ = (
        Index("ix_behavior_ratings_prisoner_date", "prisoner_id", "rating_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    prisoner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("prisoners.id", ondelete="CASCADE"), nullable=False
    )
    cooperation: Mapped[int] = mapped_column(Integer, nullable=False)
    discipline: Mapped[int] = mapped_column(Integer, nullable=False)
    respect: Mapped[int] = mapped_column(Integer, nullable=False)
    work_ethic: Mapped[int] = mapped_column(Integer, nullable=False)
    overall_rating: Mapped[float] = mapped_column(Float, nullable=False)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)
    period: Mapped[str] = mapped_column(String(20), default="monthly", nullable=False)
    rated_by: Mapped[str] = mapped_column(String(64), nullable=False)
    rating_date: Mapped[datetime] = mapped_column(default=utc_now, nullable=False)


class ValidationRecordDB(TimestampMixin, Base):
    """Outcome of a government validation or an approved override."""

    __tablename__ = "validation_records"
    __table_args__ = (
        Index("ix_validation_records_prisoner_created", "prisoner_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    prisoner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("prisoners.id", ondelete="CASCADE"), nullable=False
    )
    government_id_number: Mapped[Optional[str]] = mapped_column(String(32))
    validation_status: Mapped[str] = mapped_column(String(32), nullable=False)
    discrepancies: Mapped[List[dict]] = mapped_column(JSON, default=list, nullable=False)
    override_reason: Mapped[Optional[str]] = mapped_column(Text)
    approved_by: Mapped[Optional[str]] = mapped_column(String(64))
    approved_at: Mapped[Optional[datetime]] = mapped_column()
