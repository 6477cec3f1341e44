"""
Embedding provider configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding model configuration for chunk indexing
"""

from pydantic import AliasChoices, Field

from chatppc.configs.base import BaseSettings, settings_config


class EmbeddingSettings(BaseSettings):
    """Google Gemini embedding configuration."""

    model_config = settings_config("EMBEDDINGS_")

    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("EMBEDDINGS_GOOGLE_API_KEY", "GOOGLE_API_KEY"),
        description="API key for the Google Generative AI embedding endpoint",
    )
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    dimension: int = Field(
        default=1536,
        description="Fixed output dimension for every embedding call",
    )
    max_retries: int = Field(
        default=5,
        description="Attempts per embedding batch before giving up",
    )
