"""
PMIS Configuration Module
=========================

Centralized configuration management using Pydantic Settings.

Loads configuration from:
    1. Environment variables (prefixed ``PMIS_``)
    2. .env file (if present)
    3. Default values

Usage:
    from pmis.config import get_settings

    settings = get_settings()
    print(settings.database_url)

Author: PMIS Team
Version: 1.0.0
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Naming convention: PMIS_UPPER_SNAKE_CASE in env, lower_snake_case in code.
    """

    model_config = SettingsConfigDict(
        env_prefix="PMIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # =========================================================================
    # Application Settings
    # =========================================================================

    app_name: str = Field(default="PMIS", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=True, description="Render logs as JSON")

    # =========================================================================
    # API Server
    # =========================================================================

    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=5000, description="API server port")
    cors_allowed_origins: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    # =========================================================================
    # Database
    # =========================================================================

    database_url: str = Field(
        default="sqlite+aiosqlite:///./pmis.db",
        description="SQLAlchemy async database URL"
    )

    # =========================================================================
    # Authentication
    # =========================================================================

    jwt_secret: str = Field(
        default="pmis-dev-secret-CHANGE-IN-PRODUCTION",
        description="HMAC secret for signing access tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expire_minutes: int = Field(default=60, ge=1, description="Token TTL in minutes")

    # =========================================================================
    # Behavior & Rating Windows
    # =========================================================================

    behavior_score_window: int = Field(
        default=50,
        ge=1,
        description="Most recent incidents used for a prisoner's stored behavior score"
    )
    prisoner_rating_window: int = Field(
        default=10,
        ge=1,
        description="Most recent ratings averaged into a prisoner's overall rating"
    )
    summary_default_months: int = Field(
        default=6,
        ge=1,
        description="Default look-back for behavior and rating summaries (months)"
    )
    top_rated_default_months: int = Field(
        default=3,
        ge=1,
        description="Default look-back for the top-rated listing (months)"
    )
    top_rated_min_ratings: int = Field(
        default=2,
        ge=1,
        description="Minimum ratings a prisoner needs to appear in top-rated"
    )

    # =========================================================================
    # Government Registry
    # =========================================================================

    reference_lookup_latency_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Simulated latency of the government registry lookup"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are loaded only once.

    Returns:
        Settings instance
    """
    return Settings()


# Convenience alias
settings = get_settings()
