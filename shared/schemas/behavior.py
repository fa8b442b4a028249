"""
PMIS Behavior Schemas
=====================

Behavior incident types and the request/response models used by the
behavior log endpoints.

Key Components:
    - BehaviorType: positive / negative / neutral incident classification
    - IncidentSeverity: low / medium / high / critical
    - BehaviorLogCreate / BehaviorLogUpdate: request bodies
    - BehaviorSummaryResponse: aggregate summary incl. behavior score

Author: PMIS Team
Version: 1.0.0
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from shared.schemas.base import CamelModel


class BehaviorType(str, Enum):
    """Classification of a recorded behavior incident."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class IncidentSeverity(str, Enum):
    """Severity of a recorded behavior incident."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LogStatus(str, Enum):
    """Review lifecycle of a behavior log."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    ESCALATED = "escalated"


class BehaviorLogCreate(CamelModel):
    """Request: record a new behavior incident."""
    prisoner_id: str
    behavior_type: BehaviorType
    severity: IncidentSeverity = IncidentSeverity.MEDIUM
    description: str = Field(..., min_length=1, max_length=1000)
    location: str = Field(..., min_length=1)
    witnesses: List[str] = Field(default_factory=list)
    action_taken: str = Field(default="", max_length=500)
    date: Optional[datetime] = Field(None, description="Incident time, defaults to now")


class BehaviorLogUpdate(CamelModel):
    """Request: partial update of a behavior log."""
    behavior_type: Optional[BehaviorType] = None
    severity: Optional[IncidentSeverity] = None
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    location: Optional[str] = None
    witnesses: Optional[List[str]] = None
    action_taken: Optional[str] = Field(None, max_length=500)
    status: Optional[LogStatus] = None


class BehaviorLogResponse(CamelModel):
    """A stored behavior log."""
    id: str
    prisoner_id: str
    behavior_type: BehaviorType
    severity: IncidentSeverity
    description: str
    location: str
    date: datetime
    witnesses: List[str] = Field(default_factory=list)
    action_taken: str = ""
    recorded_by: str
    status: LogStatus = LogStatus.PENDING


class SeverityCounts(CamelModel):
    low: int = 0
    medium: int = 0
    high: int = 0
    critical: int = 0


class BehaviorSummaryResponse(CamelModel):
    """Response: behavior statistics for one prisoner over a window."""
    prisoner_id: str
    total_incidents: int
    positive: int
    negative: int
    neutral: int
    by_severity: SeverityCounts
    recent_logs: List[BehaviorLogResponse]
    behavior_score: int = Field(..., ge=0, le=100)


class BehaviorTrendPoint(CamelModel):
    """Incident count for one (year, month, behavior type) bucket."""
    year: int
    month: int
    behavior_type: BehaviorType
    count: int
