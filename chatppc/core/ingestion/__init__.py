"""
Document ingestion pipeline.

Hash -> compare with stored hash -> (delete) -> split -> embed -> store.
"""

from chatppc.core.ingestion.hashing import EMPTY_CONTENT_HASH, get_document_hash
from chatppc.core.ingestion.models import (
    BatchIngestionSummary,
    ChunkMetadata,
    IngestionResult,
    IngestionState,
    IngestionStatus,
)
from chatppc.core.ingestion.orchestrator import IngestionOrchestrator
from chatppc.core.ingestion.sources import find_markdown_files, normalize_source
from chatppc.core.ingestion.splitter import DocumentSplitter

__all__ = [
    "EMPTY_CONTENT_HASH",
    "get_document_hash",
    "BatchIngestionSummary",
    "ChunkMetadata",
    "IngestionResult",
    "IngestionState",
    "IngestionStatus",
    "IngestionOrchestrator",
    "find_markdown_files",
    "normalize_source",
    "DocumentSplitter",
]
