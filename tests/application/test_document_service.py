"""Tests for DocumentService uploads."""

import pytest

from chatppc.application.services.document_service import DocumentService
from chatppc.boundary.db.CRUD.document_chunk_crud import document_chunk_crud
from chatppc.core.exceptions import ValidationError


@pytest.fixture
def service(test_async_db, chunk_store) -> DocumentService:
    return DocumentService(test_async_db, chunk_store)


@pytest.mark.asyncio
async def test_upload_reports_per_file_outcomes(service, test_async_db):
    await service.upload_files([("guide.md", b"# Guide\n\nText")])

    response = await service.upload_files(
        [
            ("guide.md", b"# Guide\n\nText"),
            ("new.md", b"# New\n\nBody"),
            ("blank.md", b"  "),
            ("binary.md", b"\xff\xfe\x00bad"),
        ]
    )

    outcomes = {r.file_name: (r.status, r.message) for r in response.results}
    assert outcomes["guide.md"] == ("skipped", "File content unchanged")
    assert outcomes["new.md"] == ("success", "Successfully processed 1 chunks")
    assert outcomes["blank.md"] == ("skipped", "File is empty")
    assert outcomes["binary.md"][0] == "error"
    assert response.total_files == 4
    assert response.success_count == 1
    assert response.skipped_count == 2
    assert response.error_count == 1
    assert await document_chunk_crud.get_distinct_sources(test_async_db) == ["guide.md", "new.md"]


@pytest.mark.asyncio
async def test_upload_without_files_is_rejected(service):
    with pytest.raises(ValidationError):
        await service.upload_files([])
