"""
Document ingestion configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Splitter and file discovery configuration
"""

from pydantic import Field

from chatppc.configs.base import BaseSettings, settings_config


class IngestionSettings(BaseSettings):
    """Chunking and file scanning configuration."""

    model_config = settings_config("INGEST_")

    chunk_size: int = Field(default=4000, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=200, description="Overlap between consecutive chunks")
    file_extension: str = Field(default=".md", description="Extension scanned by the batch CLI")
