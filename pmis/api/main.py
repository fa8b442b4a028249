"""
PMIS API Main Application
=========================

FastAPI application entry point for the PMIS REST API.

Features:
    - OpenAPI documentation at /docs
    - Prisoner, behavior, rating and government validation endpoints
    - CORS middleware for cross-origin requests
    - Async lifespan management

Usage:
    # Development:
    uvicorn pmis.api.main:app --reload

    # Production:
    uvicorn pmis.api.main:app --host 0.0.0.0 --port 5000

Author: PMIS Team
Version: 1.0.0
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pmis.config import Settings, get_settings
from pmis.api.dependencies import ServiceContainer
from pmis.api.routes import (
    behavior_router,
    health_router,
    prisoners_router,
    ratings_router,
    validation_router,
)
from pmis.exceptions import ConflictError, NotFoundError, PMISError, ValidationError
from pmis.logging import RequestLoggingMiddleware, get_logger, setup_logging
from pmis.validation.registry import ReferenceLookup


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown of services.
    """
    logger.info("Starting PMIS API...")

    container: ServiceContainer = app.state.container
    await container.initialize()

    logger.info("PMIS API started successfully")

    yield

    logger.info("Shutting down PMIS API...")
    await container.shutdown()
    logger.info("PMIS API shutdown complete")


def _error_response(status_code: int, exc: PMISError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(PMISError)
    async def pmis_error_handler(request: Request, exc: PMISError) -> JSONResponse:
        logger.error("unhandled_service_error", error=str(exc), path=request.url.path)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)


def create_app(
    settings: Optional[Settings] = None,
    reference_lookup: Optional[ReferenceLookup] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to environment-derived settings
        reference_lookup: Government registry; defaults to the in-memory sample registry

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    setup_logging(level=settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="PMIS API",
        description=(
            "Prison Management Information System API\n\n"
            "The PMIS platform provides:\n"
            "- Behavior incident logging and scoring\n"
            "- Periodic behavior ratings with trend analysis\n"
            "- Identity validation against government records\n\n"
            "## Authentication\n"
            "All endpoints except `/health/*` require a valid JWT token. "
            "Include `Authorization: Bearer <token>` in request headers.\n\n"
            "Roles: `admin`, `warden`, `staff`, `visitor`"
        ),
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.container = ServiceContainer(settings, reference_lookup=reference_lookup)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    _register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(prisoners_router)
    app.include_router(behavior_router)
    app.include_router(ratings_router)
    app.include_router(validation_router)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint returning API info."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "description": "Prison Management Information System API",
            "docs": "/docs",
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "pmis.api.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
        reload=_settings.debug,
    )
