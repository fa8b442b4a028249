"""
PMIS API Routes Package
=======================

FastAPI route modules.

Author: PMIS Team
Version: 1.0.0
"""

from pmis.api.routes.health import router as health_router
from pmis.api.routes.prisoners import router as prisoners_router
from pmis.api.routes.behavior import router as behavior_router
from pmis.api.routes.ratings import router as ratings_router
from pmis.api.routes.validation import router as validation_router

__all__ = [
    "health_router",
    "prisoners_router",
    "behavior_router",
    "ratings_router",
    "validation_router",
]
