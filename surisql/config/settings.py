"""
Library Settings

Centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with sensible defaults.

Configuration Categories:
=========================
- Application: Name, environment and log level
- Database: Connection URL and pool settings used by surisql.db
- Query Logging: Whether bound parameter values appear in debug logs

Environment Variables:
======================
Settings are loaded from environment variables or .env file.
Environment variables take precedence over .env file values.

Usage:
======
    from surisql.config.settings import settings

    # Access settings
    db_url = settings.DATABASE_URL
    is_dev = settings.is_development
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Use .env file for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # APPLICATION
    # ═══════════════════════════════════════════════════════════════════════════════

    APP_NAME: str = "surisql"
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ═══════════════════════════════════════════════════════════════════════════════
    # DATABASE
    # ═══════════════════════════════════════════════════════════════════════════════

    DATABASE_URL: str = Field(
        default="sqlite:///./surisql.db",
        description="SQLAlchemy connection URL (synchronous driver)",
    )
    DATABASE_POOL_SIZE: int = Field(
        default=10,
        description="Number of persistent connections in the pool",
    )
    DATABASE_MAX_OVERFLOW: int = Field(
        default=20,
        description="Extra connections allowed when pool is exhausted",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # QUERY LOGGING
    # ═══════════════════════════════════════════════════════════════════════════════

    QUERY_LOG_PARAMS: bool = Field(
        default=False,
        description="Include bound parameter values in query debug logs",
    )

    # ═══════════════════════════════════════════════════════════════════════════════
    # PROPERTIES
    # ═══════════════════════════════════════════════════════════════════════════════

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite (no server-side pool)."""
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.

    Returns:
        Settings: Library settings instance
    """
    return Settings()


# Global settings instance for convenient import
settings = get_settings()
