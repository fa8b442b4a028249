"""
PMIS Health Schemas
===================

Health check response models used by monitoring and orchestration.

Author: PMIS Team
Version: 1.0.0
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from shared.schemas.base import CamelModel


class DependencyHealth(CamelModel):
    """Health of one backing service."""
    name: str
    status: str = Field(..., description="healthy, degraded, unhealthy or unavailable")
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class HealthResponse(CamelModel):
    service: str = "pmis"
    status: str
    version: str
    uptime_seconds: float
    dependencies: List[DependencyHealth] = Field(default_factory=list)
    timestamp: datetime
