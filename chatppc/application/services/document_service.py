"""
Document service orchestrator.

Runs admin uploads through the ingestion orchestrator, one file at a
time, and reports a per-file outcome. A failing file never aborts the
rest of the upload.

Dependencies: chatppc.core.ingestion, chatppc.boundary.vdb, chatppc.models
System role: Document upload orchestration
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from chatppc.boundary.vdb.chunk_store import ChunkStore
from chatppc.core.exceptions import ValidationError
from chatppc.core.ingestion.models import IngestionResult, IngestionStatus
from chatppc.core.ingestion.orchestrator import IngestionOrchestrator
from chatppc.core.ingestion.splitter import DocumentSplitter
from chatppc.models.document import UploadResponse, UploadResult

logger = logging.getLogger(__name__)


class DocumentService:
    """Document upload orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        chunk_store: ChunkStore,
        splitter: DocumentSplitter | None = None,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession used for chunk storage
            chunk_store: Embeds and persists chunks
            splitter: Optional DocumentSplitter (defaults if None)
        """
        self.db = db
        self.orchestrator = IngestionOrchestrator(db, chunk_store, splitter)

    async def upload_files(self, files: Sequence[tuple[str, bytes]]) -> UploadResponse:
        """
        Ingest uploaded files keyed by their filename.

        Args:
            files: (filename, raw bytes) pairs

        Returns:
            UploadResponse: Per-file results plus success/error/skipped counts

        Raises:
            ValidationError: No files were provided
        """
        if not files:
            raise ValidationError("No files provided", field="files")

        results: list[UploadResult] = []
        for file_name, raw in files:
            try:
                content = raw.decode("utf-8")
            except UnicodeDecodeError:
                logger.warning("Uploaded file is not UTF-8", extra={"file_name": file_name})
                results.append(
                    UploadResult(
                        file_name=file_name,
                        status=IngestionStatus.ERROR.value,
                        message="File is not valid UTF-8 text",
                    )
                )
                continue

            outcome = await self.orchestrator.ingest_document(file_name, content)
            results.append(self._to_upload_result(file_name, outcome))

        response = UploadResponse(
            results=results,
            total_files=len(files),
            success_count=self._count(results, IngestionStatus.SUCCESS),
            error_count=self._count(results, IngestionStatus.ERROR),
            skipped_count=self._count(results, IngestionStatus.SKIPPED),
        )
        logger.info(
            "Upload processed",
            extra={
                "total_files": response.total_files,
                "success": response.success_count,
                "errors": response.error_count,
                "skipped": response.skipped_count,
            },
        )
        return response

    @staticmethod
    def _to_upload_result(file_name: str, outcome: IngestionResult) -> UploadResult:
        return UploadResult(
            file_name=file_name,
            status=outcome.status.value,
            message=outcome.message,
            chunks=outcome.chunks if outcome.status == IngestionStatus.SUCCESS else None,
        )

    @staticmethod
    def _count(results: list[UploadResult], status: IngestionStatus) -> int:
        return sum(1 for r in results if r.status == status.value)
