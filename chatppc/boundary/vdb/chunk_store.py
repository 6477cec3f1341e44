"""
Chunk store backed by the relational "documents" table.

Embeds chunk text through a LangChain Embeddings model and persists the
text, metadata and vector through DocumentChunkCRUD. Embedding calls are
retried with exponential backoff because the hosted endpoint throttles.
Similarity search embeds the query with the same model and ranks stored
vectors by cosine similarity, optionally filtered on metadata.

Dependencies: langchain_core, tenacity, chatppc.boundary.db
System role: Read and write side of the retrieval corpus
"""

import asyncio
import logging
import math
from typing import Any, Callable

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import Retrying, stop_after_attempt, wait_exponential_jitter
from tenacity.wait import wait_base

from chatppc.boundary.db.CRUD.document_chunk_crud import document_chunk_crud
from chatppc.boundary.vdb.vector_schemas import ChunkSearchResult
from chatppc.core.exceptions import EmbeddingError, VectorStoreError
from chatppc.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class ChunkStore:
    """Embed, persist and search document chunks."""

    def __init__(
        self,
        embeddings: Embeddings,
        max_retries: int = 5,
        retry_wait: wait_base | None = None,
    ) -> None:
        """
        Initialize the chunk store.

        Args:
            embeddings: LangChain embedding model
            max_retries: Attempts per embedding batch
            retry_wait: tenacity wait strategy (exponential with jitter by default)
        """
        self._embeddings = embeddings
        self._max_retries = max(1, max_retries)
        self._retry_wait = retry_wait or wait_exponential_jitter(initial=1, max=30, jitter=5)

    def _with_retry(self, embed: Callable[[Any], Any], payload: Any) -> Any:
        """Call an embedding method, retrying transient failures."""
        retrying = Retrying(
            stop=stop_after_attempt(self._max_retries),
            wait=self._retry_wait,
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:embed - Retry {retry_state.attempt_number}/{self._max_retries}"
            ),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                return embed(payload)
        return None

    async def add_documents(self, db: AsyncSession, documents: list[Document]) -> list[int]:
        """
        Embed and insert chunks.

        Runs inside the caller's transaction; the caller commits.

        Args:
            db: Async database session
            documents: Chunks with metadata

        Returns:
            list[int]: Store-assigned chunk ids

        Raises:
            ValueError: When documents is empty
            EmbeddingError: When embedding fails after all retries
            VectorStoreError: When the insert fails
        """
        if not documents:
            raise ValueError("No documents to store")

        texts = [doc.page_content for doc in documents]
        try:
            vectors = await asyncio.to_thread(
                self._with_retry, self._embeddings.embed_documents, texts
            )
        except Exception as e:
            raise EmbeddingError(
                f"Embedding failed: {e}",
                source=documents[0].metadata.get("source"),
                details={"chunk_count": len(documents)},
            ) from e

        try:
            ids = await document_chunk_crud.create_many(
                db,
                contents=texts,
                metadatas=[doc.metadata for doc in documents],
                embeddings=vectors,
            )
        except SQLAlchemyError as e:
            log_with_context(
                logger,
                logging.ERROR,
                "Chunk insert failed",
                source=documents[0].metadata.get("source"),
                chunk_count=len(documents),
                error=e,
            )
            raise VectorStoreError(f"Chunk insert failed: {e}", operation="insert") from e
        logger.info(
            "Stored document chunks",
            extra={"chunk_count": len(ids), "source": documents[0].metadata.get("source")},
        )
        return ids

    async def delete_source(self, db: AsyncSession, source: str) -> int:
        """Delete every chunk of a source; returns the number removed."""
        try:
            deleted = await document_chunk_crud.delete_by_source(db, source)
        except SQLAlchemyError as e:
            log_with_context(logger, logging.ERROR, "Chunk delete failed", source=source, error=e)
            raise VectorStoreError(f"Chunk delete failed: {e}", operation="delete") from e
        logger.info("Deleted document chunks", extra={"source": source, "chunk_count": deleted})
        return deleted

    async def similarity_search(
        self,
        db: AsyncSession,
        query: str,
        k: int = 4,
        filter: dict[str, Any] | None = None,
    ) -> list[ChunkSearchResult]:
        """
        Rank stored chunks by cosine similarity to a query.

        Args:
            db: Async database session
            query: Search text, embedded with the same model as the chunks
            k: Maximum number of results
            filter: Metadata key/value pairs every result must match

        Returns:
            list[ChunkSearchResult]: Best matches first

        Raises:
            EmbeddingError: When the query cannot be embedded
        """
        if k < 1 or not query.strip():
            return []

        try:
            query_vector = await asyncio.to_thread(
                self._with_retry, self._embeddings.embed_query, query
            )
        except Exception as e:
            raise EmbeddingError(f"Query embedding failed: {e}") from e

        rows = await document_chunk_crud.get_embedded(db)
        scored = [
            ChunkSearchResult(
                id=row.id,
                content=row.content,
                metadata=row.chunk_metadata or {},
                similarity=cosine_similarity(query_vector, row.embedding),
            )
            for row in rows
            if _matches(row.chunk_metadata or {}, filter)
        ]
        scored.sort(key=lambda result: result.similarity, reverse=True)
        logger.info(
            "Similarity search",
            extra={"candidate_count": len(scored), "result_count": min(k, len(scored))},
        )
        return scored[:k]


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity of two vectors; 0.0 when either is zero or lengths differ."""
    if len(a) != len(b):
        return 0.0
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0:
        return 0.0
    return sum(x * y for x, y in zip(a, b)) / norm


def _matches(metadata: dict[str, Any], filter: dict[str, Any] | None) -> bool:
    if not filter:
        return True
    return all(metadata.get(key) == value for key, value in filter.items())
