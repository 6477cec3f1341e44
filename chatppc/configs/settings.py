"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator

from chatppc.configs.auth import AuthSettings
from chatppc.configs.base import BaseSettings
from chatppc.configs.database import DatabaseSettings
from chatppc.configs.embeddings import EmbeddingSettings
from chatppc.configs.ingestion import IngestionSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    embeddings: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed by CORS (JSON list in CORS_ORIGINS)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize to upper case and reject unknown level names."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def missing_ingestion_config(self) -> list[str]:
        """
        List environment variables required for ingestion that are unset.

        Returns:
            list[str]: Variable names, empty when ingestion can run
        """
        missing = []
        if not (self.database.url or self.database.host):
            missing.append("POSTGRES_HOST")
        if not (self.database.url or self.database.password):
            missing.append("POSTGRES_PASSWORD")
        if not self.embeddings.google_api_key:
            missing.append("GOOGLE_API_KEY")
        return missing


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from chatppc.configs import get_settings
        settings = get_settings()
    """
    return Settings()
