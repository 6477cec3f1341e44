"""
Document domain models and schemas.

Schemas for the admin document browser and upload endpoint.

Dependencies: pydantic, chatppc.models.common
System role: Document API contracts
"""

from typing import Any

from pydantic import BaseModel, Field

from chatppc.models.common import Pagination


class DocumentGroup(BaseModel):
    """One logical document (all chunks sharing a source)."""

    source: str
    title: str
    chunk_count: int


class DocumentListResponse(BaseModel):
    """Grouped document listing."""

    total_documents: int
    total_chunks: int
    documents: list[DocumentGroup]
    pagination: Pagination


class DocumentSourcesResponse(BaseModel):
    """Distinct document sources."""

    success: bool = True
    sources: list[str]


class ChunkResponse(BaseModel):
    """Chunk as shown in a document's chunk list."""

    id: str
    chunk_index: int = Field(description="1-based position in the list")
    content: str
    metadata: dict[str, Any]


class DocumentChunksResponse(BaseModel):
    """All chunks matching a document identifier."""

    source: str
    chunk_count: int
    chunks: list[ChunkResponse]


class ChunkDetailResponse(BaseModel):
    """Single chunk looked up by id."""

    id: int
    source: str
    title: str
    content: str
    metadata: dict[str, Any]
    chunk_count: int = 1
    chunk_index: int = 1


class DeleteDocumentRequest(BaseModel):
    """Delete all chunks of a source."""

    source: str = ""


class DeleteDocumentResponse(BaseModel):
    """Result of deleting a document."""

    success: bool = True
    message: str
    deleted_chunks: int


class UploadResult(BaseModel):
    """Outcome for one uploaded file."""

    file_name: str
    status: str
    message: str
    chunks: int | None = None


class UploadResponse(BaseModel):
    """Per-file outcomes plus counts."""

    success: bool = True
    results: list[UploadResult]
    total_files: int
    success_count: int
    error_count: int
    skipped_count: int
