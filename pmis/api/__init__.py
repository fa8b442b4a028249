"""
PMIS API Package
================

FastAPI REST API layer for the PMIS platform.

This package provides:
    - main: FastAPI application and route configuration
    - routes/: Endpoint implementations
    - dependencies: Per-application service container
    - auth: JWT authentication and role checks

Author: PMIS Team
Version: 1.0.0
"""

from pmis.api.main import app, create_app

__all__ = [
    "app",
    "create_app",
]
