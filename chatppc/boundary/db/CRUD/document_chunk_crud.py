"""
Document chunk CRUD operations.

Provides source-level queries over the "documents" table: the
existing-hash lookup used for change detection, delete-by-source, and
the grouped views used by the admin document browser.

Dependencies: sqlalchemy, chatppc.boundary.db.models
System role: Chunk persistence and lookup for ingestion and admin
"""

import logging
from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chatppc.boundary.db.CRUD.base_crud import BaseCRUD
from chatppc.boundary.db.models.document_chunk_model import DocumentChunkModel

logger = logging.getLogger(__name__)

source_expr = DocumentChunkModel.chunk_metadata["source"].as_string()
title_expr = DocumentChunkModel.chunk_metadata["title"].as_string()
hash_expr = DocumentChunkModel.chunk_metadata["hash"].as_string()


class DocumentChunkCRUD(BaseCRUD[DocumentChunkModel]):
    """CRUD operations for DocumentChunkModel."""

    def __init__(self) -> None:
        """Initialize DocumentChunkCRUD with DocumentChunkModel."""
        super().__init__(DocumentChunkModel)

    async def get_existing_hash(self, session: AsyncSession, source: str) -> str | None:
        """
        Look up the stored content hash for a source.

        A failing query is logged and reported as "not found" so that
        ingestion re-indexes the document instead of aborting. The
        transaction is rolled back so the session stays usable.

        Args:
            session: Async database session
            source: Normalized source identifier

        Returns:
            str | None: Stored hash, or None when no chunk exists or the lookup failed
        """
        stmt = (
            select(hash_expr)
            .where(source_expr == source)
            .order_by(DocumentChunkModel.id.desc())
            .limit(1)
        )
        try:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning(
                "Existing hash lookup failed; treating document as new",
                extra={"source": source, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            await session.rollback()
            return None

    async def create_many(
        self,
        session: AsyncSession,
        contents: Sequence[str],
        metadatas: Sequence[dict[str, Any]],
        embeddings: Sequence[list[float]] | None = None,
    ) -> list[int]:
        """
        Insert chunk rows in one flush.

        Args:
            session: Async database session
            contents: Chunk texts
            metadatas: Metadata map per chunk
            embeddings: Embedding vector per chunk, if computed

        Returns:
            list[int]: Store-assigned chunk ids in insertion order

        Raises:
            ValueError: When the sequences have different lengths
        """
        if len(contents) != len(metadatas):
            raise ValueError("contents and metadatas must have the same length")
        if embeddings is not None and len(embeddings) != len(contents):
            raise ValueError("embeddings must match contents in length")

        instances = [
            DocumentChunkModel(
                content=content,
                chunk_metadata=dict(metadata),
                embedding=list(embeddings[i]) if embeddings is not None else None,
            )
            for i, (content, metadata) in enumerate(zip(contents, metadatas))
        ]
        session.add_all(instances)
        await session.flush()
        return [instance.id for instance in instances]

    async def get_by_source(
        self,
        session: AsyncSession,
        source: str,
    ) -> Sequence[DocumentChunkModel]:
        """Retrieve all chunks of a source ordered by id."""
        stmt = (
            select(DocumentChunkModel)
            .where(source_expr == source)
            .order_by(DocumentChunkModel.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_embedded(self, session: AsyncSession) -> Sequence[DocumentChunkModel]:
        """Retrieve every chunk that has a stored embedding, ordered by id."""
        stmt = (
            select(DocumentChunkModel)
            .where(DocumentChunkModel.embedding.is_not(None))
            .order_by(DocumentChunkModel.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_title(
        self,
        session: AsyncSession,
        title: str,
    ) -> Sequence[DocumentChunkModel]:
        """Retrieve all chunks whose metadata title matches, ordered by id."""
        stmt = (
            select(DocumentChunkModel)
            .where(title_expr == title)
            .order_by(DocumentChunkModel.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_source(self, session: AsyncSession, source: str) -> int:
        """Count chunks stored for a source."""
        stmt = (
            select(func.count())
            .select_from(DocumentChunkModel)
            .where(source_expr == source)
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def delete_by_source(self, session: AsyncSession, source: str) -> int:
        """
        Delete every chunk of a source.

        Returns:
            int: Number of deleted chunks
        """
        stmt = delete(DocumentChunkModel).where(source_expr == source)
        result = await session.execute(stmt)
        return result.rowcount

    async def get_source_groups(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """
        Group chunks by source with chunk counts.

        Args:
            session: Async database session
            limit: Maximum number of groups to return
            offset: Number of groups to skip

        Returns:
            list of {"source", "title", "chunk_count"} ordered by source
        """
        stmt = (
            select(
                source_expr.label("source"),
                func.max(title_expr).label("title"),
                func.count().label("chunk_count"),
            )
            .group_by(source_expr)
            .order_by(source_expr)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return [
            {"source": row.source, "title": row.title, "chunk_count": row.chunk_count}
            for row in result.all()
        ]

    async def count_sources(self, session: AsyncSession) -> int:
        """Count distinct source groups (chunks without a source form one group)."""
        grouped = select(source_expr.label("source")).group_by(source_expr).subquery()
        stmt = select(func.count()).select_from(grouped)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def get_distinct_sources(self, session: AsyncSession) -> list[str]:
        """Return sorted distinct non-null sources."""
        stmt = (
            select(source_expr)
            .where(source_expr.is_not(None))
            .distinct()
            .order_by(source_expr)
        )
        result = await session.execute(stmt)
        return [source for source in result.scalars().all() if source]


document_chunk_crud = DocumentChunkCRUD()
