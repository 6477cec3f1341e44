"""
Admin document API endpoints.

Routes:
- GET /admin/documents - Documents grouped by source
- DELETE /admin/documents - Delete all chunks of a source
- GET /admin/documents/sources - Distinct sources
- POST /admin/documents/upload - Ingest uploaded markdown files
- GET /admin/documents/id/{id} - One chunk by id
- GET /admin/documents/{identifier} - Chunks by id, source or title

Fixed paths are registered before the catch-all identifier route.

Dependencies: fastapi, chatppc.application.services, chatppc.models, chatppc.api.deps
System role: Admin document management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from chatppc.api.deps import get_admin_service, get_document_service, require_admin_user
from chatppc.application.services.admin_service import AdminService
from chatppc.application.services.document_service import DocumentService
from chatppc.models.document import (
    ChunkDetailResponse,
    DeleteDocumentRequest,
    DeleteDocumentResponse,
    DocumentChunksResponse,
    DocumentListResponse,
    DocumentSourcesResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/documents",
    tags=["admin"],
    dependencies=[Depends(require_admin_user)],
)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    page: int = 1,
    limit: int = 20,
    service: AdminService = Depends(get_admin_service),
) -> DocumentListResponse:
    """List documents grouped by source with chunk counts."""
    return await service.list_documents(page=page, limit=limit)


@router.delete("", response_model=DeleteDocumentResponse)
async def delete_document(
    request: DeleteDocumentRequest,
    service: AdminService = Depends(get_admin_service),
) -> DeleteDocumentResponse:
    """
    Delete every chunk of a source.

    Raises:
        400: Blank source
        404: No chunks for the source
    """
    deleted = await service.delete_document(request.source)
    return DeleteDocumentResponse(
        message=f"Successfully deleted {deleted} chunk(s) for document: {request.source}",
        deleted_chunks=deleted,
    )


@router.get("/sources", response_model=DocumentSourcesResponse)
async def list_sources(
    service: AdminService = Depends(get_admin_service),
) -> DocumentSourcesResponse:
    """List sorted distinct document sources."""
    return DocumentSourcesResponse(sources=await service.list_document_sources())


@router.post("/upload", response_model=UploadResponse)
async def upload_documents(
    files: list[UploadFile] | None = File(default=None),
    service: DocumentService = Depends(get_document_service),
) -> UploadResponse:
    """
    Ingest uploaded files; each file's name is its source identifier.

    Raises:
        400: No files provided
    """
    payload = []
    for upload in files or []:
        payload.append((upload.filename or "upload", await upload.read()))
    return await service.upload_files(payload)


@router.get("/id/{chunk_id}", response_model=ChunkDetailResponse)
async def get_chunk(
    chunk_id: str,
    service: AdminService = Depends(get_admin_service),
) -> ChunkDetailResponse:
    """
    Get one chunk by id.

    Raises:
        400: Id is not a positive integer
        404: No such chunk
    """
    return await service.get_chunk(chunk_id)


@router.get("/{identifier:path}", response_model=DocumentChunksResponse)
async def get_document_chunks(
    identifier: str,
    service: AdminService = Depends(get_admin_service),
) -> DocumentChunksResponse:
    """
    Get chunks for a chunk id, source or title.

    Raises:
        404: Nothing matches
    """
    return await service.get_document_chunks(identifier)
