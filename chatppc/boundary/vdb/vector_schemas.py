"""
Chunk search schemas.

Dependencies: pydantic
System role: Type definitions for similarity search over stored chunks
"""

from typing import Any

from pydantic import BaseModel, Field


class ChunkSearchResult(BaseModel):
    """Single result from a similarity search."""

    id: int = Field(description="Store-assigned chunk id")
    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata")
    similarity: float = Field(description="Cosine similarity to the query (-1.0 to 1.0)")
