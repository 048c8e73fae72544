"""
Application configuration using Pydantic settings.

Usage:
    from core.config import get_settings
    settings = get_settings()

For constants, import from core.constants:
    from core.constants import IssueType, ISSUE_TYPE_NAMES
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Required for production:
        - JWT_SECRET_KEY (min 32 chars)
        - TMDB_API_KEY (for the media details lookup)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "Media Issue Tracker"
    api_prefix: str = "/api"
    debug: bool = Field(default=False)

    # Database
    database_url: str = Field(default="sqlite:///issue_tracker.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")
    create_tables_on_startup: bool = Field(default=True, validation_alias="CREATE_TABLES_ON_STARTUP")

    # JWT / Authentication
    jwt_secret_key: str = Field(default="CHANGE_ME", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 24)

    # CORS
    cors_allowed_origins: str = Field(default="http://localhost:5055", validation_alias="CORS_ALLOWED_ORIGINS")

    # TMDB media details
    tmdb_api_key: str = Field(default="", validation_alias="TMDB_API_KEY")
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3", validation_alias="TMDB_BASE_URL")
    tmdb_timeout: int = Field(default=10, validation_alias="TMDB_TIMEOUT")

    # Issues
    issue_page_size: int = Field(default=10, ge=1, validation_alias="ISSUE_PAGE_SIZE")

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Validate JWT secret - warns in dev, errors in production."""
        import os
        import warnings

        env = os.getenv("ENV", "development")
        is_production = env.lower() in ("production", "prod")

        forbidden_values = ["CHANGE_ME", "changeme", "secret", "jwt-secret", "test"]
        is_forbidden = v.lower() in [fv.lower() for fv in forbidden_values]

        if is_production and (is_forbidden or len(v) < 32):
            raise ValueError(
                "JWT_SECRET_KEY must be a non-default value of at least 32 characters in production. "
                "Generate a secure key with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
            )
        if not is_production and is_forbidden:
            warnings.warn(
                f"JWT_SECRET_KEY is set to a default value ('{v}'). "
                "This is insecure - set a proper key for production.",
                UserWarning,
                stacklevel=2,
            )
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def validate_production_config(self) -> tuple[List[str], List[str]]:
        """
        Validate configuration for production deployment.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings = []

        if self.jwt_secret_key == "CHANGE_ME":
            errors.append("JWT_SECRET_KEY must be set for production")
        elif len(self.jwt_secret_key) < 32:
            errors.append("JWT_SECRET_KEY must be at least 32 characters")

        if not self.tmdb_api_key:
            warnings.append(
                "TMDB_API_KEY not set - issue detail pages cannot load media details."
            )

        return errors, warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
