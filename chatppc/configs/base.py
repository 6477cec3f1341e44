"""
Shared settings plumbing.

Every settings class reads the same .env file and ignores unknown keys;
they differ only in the environment prefix.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


def settings_config(env_prefix: str = "") -> SettingsConfigDict:
    """Build the model_config for a settings class reading ``{env_prefix}*`` variables."""
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
    )


class BaseSettings(PydanticBaseSettings):
    """Settings base reading unprefixed variables from the environment and .env."""

    model_config = settings_config()
