"""
Authentication configuration settings.

Holds the hosted auth provider endpoint used to validate admin bearer
tokens and the shared API key expected on chat endpoints.

Dependencies: pydantic, pydantic_settings
System role: Auth configuration for admin and chat routes
"""

from pydantic import Field

from chatppc.configs.base import BaseSettings, settings_config


class AuthSettings(BaseSettings):
    """Hosted auth provider and API key configuration."""

    model_config = settings_config("AUTH_")

    provider_url: str | None = Field(
        default=None,
        description="Base URL of the hosted auth provider (e.g. https://xyz.supabase.co)",
    )
    anon_key: str | None = Field(
        default=None,
        description="Public anon key sent as the 'apikey' header to the provider",
    )
    api_key: str | None = Field(
        default=None,
        description="Shared key required in the X-API-Key header on chat routes",
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for token validation calls",
    )
