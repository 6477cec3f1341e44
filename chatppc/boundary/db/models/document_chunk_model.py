"""
Document chunk ORM model.

One row per embedded chunk in the "documents" table. The metadata column
carries the logical source identifier and the hash of the whole source
document, which drive change detection during ingestion.

Dependencies: sqlalchemy, chatppc.boundary.db.base
System role: Retrieval corpus storage
"""

from typing import Any

from sqlalchemy import JSON, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from chatppc.boundary.db.base import Base

JSONVariant = JSON().with_variant(JSONB(), "postgresql")


class DocumentChunkModel(Base):
    """
    Document chunk ORM model.

    Attributes:
        id: Integer primary key (store-assigned, increasing)
        content: Chunk text
        chunk_metadata: JSON map stored in the "metadata" column; always
            holds "source" and "hash", optionally "title" and splitter keys
        embedding: Embedding vector as a JSON array of floats
    """

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    chunk_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSONVariant,
        nullable=False,
        default=dict,
    )
    embedding: Mapped[list[float] | None] = mapped_column(JSON(none_as_null=True), nullable=True)

    @property
    def source(self) -> str | None:
        return (self.chunk_metadata or {}).get("source")

    @property
    def title(self) -> str | None:
        return (self.chunk_metadata or {}).get("title")
