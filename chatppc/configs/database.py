"""
Database configuration settings.

Manages PostgreSQL connection parameters for SQLAlchemy.
A full URL (POSTGRES_URL) takes precedence over the individual fields,
which lets tests and local tooling point at any async driver.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from urllib.parse import quote_plus

from pydantic import Field

from chatppc.configs.base import BaseSettings, settings_config
from chatppc.core.exceptions import ConfigurationError


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = settings_config("POSTGRES_")

    url: str | None = Field(
        default=None,
        description="Full async SQLAlchemy URL; overrides host/user/password when set",
    )
    host: str | None = Field(default=None, description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str | None = Field(default=None, description="PostgreSQL password")
    db: str = Field(default="postgres", description="PostgreSQL database name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    sslmode: str = Field(default="require", description="SSL mode for hosted connections")

    @property
    def is_configured(self) -> bool:
        """True when either a full URL or host and password are present."""
        return bool(self.url) or bool(self.host and self.password)

    @property
    def async_database_url(self) -> str:
        """
        Construct async PostgreSQL connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL (asyncpg uses 'ssl' param)

        Raises:
            ConfigurationError: When neither a URL nor host/password are configured
        """
        if self.url:
            return self.url
        if not self.is_configured:
            raise ConfigurationError(
                "Database is not configured",
                details={"missing": ["POSTGRES_HOST", "POSTGRES_PASSWORD"]},
            )
        url = (
            f"postgresql+asyncpg://{quote_plus(self.user)}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/{self.db}"
        )
        if self.sslmode == "require":
            url += "?ssl=require"
        return url
