"""
PMIS Health Routes
==================

Health check endpoints for monitoring and orchestration.

Endpoints:
    GET /health          - Basic health with dependency info
    GET /health/ready    - Readiness with database check
    GET /health/live     - Liveness probe

Author: PMIS Team
Version: 1.0.0
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status

from shared.schemas.health import DependencyHealth, HealthResponse
from pmis.api.dependencies import ServiceContainer, get_container


router = APIRouter(tags=["Health"])

# Track startup time for uptime calculation
_start_time = time.time()


async def _database_health(container: ServiceContainer) -> DependencyHealth:
    name = container.database.backend
    if not container.database.available:
        return DependencyHealth(name=name, status="unavailable", message="Not connected")

    start = time.perf_counter()
    healthy = await container.database.ping()
    latency = (time.perf_counter() - start) * 1000
    if healthy:
        return DependencyHealth(name=name, status="healthy", latency_ms=round(latency, 2))
    return DependencyHealth(name=name, status="unhealthy", message="Ping failed")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns PMIS health status with dependency info.",
)
async def health_check(
    container: ServiceContainer = Depends(get_container),
) -> HealthResponse:
    """
    Health check endpoint for monitoring.

    Returns:
        - Overall status: healthy, degraded, unhealthy
        - Database health and ping latency
    """
    dependencies = [await _database_health(container)]

    statuses = [d.status for d in dependencies]
    if all(s == "healthy" for s in statuses):
        overall = "healthy"
    elif any(s == "unhealthy" for s in statuses):
        overall = "unhealthy"
    else:
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=container.settings.app_version,
        uptime_seconds=time.time() - _start_time,
        dependencies=dependencies,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/health/ready",
    summary="Readiness Check",
    description="Checks if PMIS is ready to handle requests.",
)
async def readiness_check(
    response: Response,
    container: ServiceContainer = Depends(get_container),
) -> Dict[str, Any]:
    """
    Readiness probe.

    Returns 503 when the database cannot be reached.
    """
    ready = container.database.available and await container.database.ping()
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"ready": ready, "database": ready}


@router.get(
    "/health/live",
    summary="Liveness Check",
    description="Liveness probe.",
)
async def liveness_check() -> Dict[str, str]:
    return {"status": "alive"}
