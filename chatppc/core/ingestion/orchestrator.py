"""
Document ingestion orchestrator.

Per document: hash the content, compare with the stored hash, and either
skip, or delete the old chunks and store a freshly split set. Each
document is committed on its own; a failing document is rolled back and
reported without stopping the batch.

Dependencies: sqlalchemy, chatppc.core.ingestion, chatppc.boundary
System role: Idempotent (re-)indexing of documents into the chunk store
"""

import logging
from typing import Callable, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from chatppc.boundary.db.CRUD.document_chunk_crud import document_chunk_crud
from chatppc.boundary.vdb.chunk_store import ChunkStore
from chatppc.core.ingestion.hashing import get_document_hash
from chatppc.core.ingestion.models import (
    BatchIngestionSummary,
    ChunkMetadata,
    IngestionResult,
    IngestionState,
    IngestionStatus,
)
from chatppc.core.ingestion.sources import normalize_source
from chatppc.core.ingestion.splitter import DocumentSplitter
from chatppc.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class IngestionOrchestrator:
    """Drive the hash / compare / replace workflow for documents."""

    def __init__(
        self,
        db: AsyncSession,
        chunk_store: ChunkStore,
        splitter: DocumentSplitter | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            db: Async database session; committed once per stored document
            chunk_store: Embeds and persists chunks
            splitter: Document splitter (default chunk size and overlap if None)
        """
        self.db = db
        self.chunk_store = chunk_store
        self.splitter = splitter or DocumentSplitter()

    async def ingest_document(
        self,
        source: str,
        content: str,
        title: str | None = None,
    ) -> IngestionResult:
        """
        Ingest one document.

        Args:
            source: File path or upload filename (normalized here)
            content: Full document text
            title: Optional display title stored with every chunk

        Returns:
            IngestionResult: success, skipped (empty/unchanged) or error
        """
        source = normalize_source(source)

        if not content.strip():
            logger.info("Skipping empty document", extra={"source": source})
            return IngestionResult(
                source=source,
                status=IngestionStatus.SKIPPED,
                state=IngestionState.EMPTY,
                message="File is empty",
            )

        current_hash = get_document_hash(content)
        existing_hash = await document_chunk_crud.get_existing_hash(self.db, source)

        if existing_hash == current_hash:
            logger.info("Skipping unchanged document", extra={"source": source})
            return IngestionResult(
                source=source,
                status=IngestionStatus.SKIPPED,
                state=IngestionState.UNCHANGED,
                message="File content unchanged",
                hash=current_hash,
                previous_hash=existing_hash,
            )

        state = IngestionState.NEW if existing_hash is None else IngestionState.CHANGED

        try:
            # A failed lookup also reports NEW, so stale chunks may exist either way
            await self.chunk_store.delete_source(self.db, source)

            metadata = ChunkMetadata(source=source, hash=current_hash, title=title)
            chunks = self.splitter.split(content, metadata.to_store())
            await self.chunk_store.add_documents(self.db, chunks)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                "Document ingestion failed",
                e,
                source=source,
                state=state.value,
            )
            return IngestionResult(
                source=source,
                status=IngestionStatus.ERROR,
                state=IngestionState.FAILED,
                message=str(e),
                hash=current_hash,
                previous_hash=existing_hash,
            )

        logger.info(
            "Document stored",
            extra={
                "source": source,
                "previous_state": state.value,
                "chunk_count": len(chunks),
            },
        )
        return IngestionResult(
            source=source,
            status=IngestionStatus.SUCCESS,
            state=IngestionState.STORED,
            message=f"Successfully processed {len(chunks)} chunks",
            chunks=len(chunks),
            hash=current_hash,
            previous_hash=existing_hash,
        )

    async def ingest_batch(
        self,
        documents: Iterable[tuple[str, str]],
        on_result: Callable[[IngestionResult], None] | None = None,
    ) -> BatchIngestionSummary:
        """
        Ingest documents one at a time.

        documents is consumed lazily, so a generator may read each file
        just before it is ingested.

        Args:
            documents: (source, content) pairs
            on_result: Called with each result as soon as it is known

        Returns:
            BatchIngestionSummary: Per-document results and counts
        """
        summary = BatchIngestionSummary()
        for source, content in documents:
            result = await self.ingest_document(source, content)
            summary.results.append(result)
            if on_result is not None:
                on_result(result)
        logger.info(
            "Batch ingestion finished",
            extra={
                "total": summary.total,
                "success": summary.success_count,
                "skipped": summary.skipped_count,
                "errors": summary.error_count,
            },
        )
        return summary
