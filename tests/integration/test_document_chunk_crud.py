"""
Test suite for DocumentChunkCRUD against SQLite.

System role: Verification of chunk persistence and source-level queries
"""

import pytest

from chatppc.boundary.db.CRUD.document_chunk_crud import document_chunk_crud

HASH_A = "a" * 64
HASH_B = "b" * 64


async def _seed(db):
    await document_chunk_crud.create_many(
        db,
        contents=["a1", "a2", "b1", "loose"],
        metadatas=[
            {"source": "a.md", "hash": HASH_A, "title": "Alpha"},
            {"source": "a.md", "hash": HASH_A, "title": "Alpha"},
            {"source": "b.md", "hash": HASH_B},
            {"note": "no source"},
        ],
        embeddings=[[0.1, 0.2]] * 4,
    )
    await db.commit()


class TestDocumentChunkCRUD:
    """Chunk queries."""

    @pytest.mark.asyncio
    async def test_create_many_returns_increasing_ids(self, test_async_db):
        ids = await document_chunk_crud.create_many(
            test_async_db,
            contents=["x", "y"],
            metadatas=[{"source": "x.md", "hash": HASH_A}] * 2,
        )

        assert len(ids) == 2
        assert ids[0] < ids[1]

    @pytest.mark.asyncio
    async def test_create_many_rejects_mismatched_lengths(self, test_async_db):
        with pytest.raises(ValueError):
            await document_chunk_crud.create_many(test_async_db, ["x"], [])

    @pytest.mark.asyncio
    async def test_existing_hash(self, test_async_db):
        await _seed(test_async_db)

        assert await document_chunk_crud.get_existing_hash(test_async_db, "a.md") == HASH_A
        assert await document_chunk_crud.get_existing_hash(test_async_db, "zzz.md") is None

    @pytest.mark.asyncio
    async def test_source_and_title_lookup(self, test_async_db):
        await _seed(test_async_db)

        by_source = await document_chunk_crud.get_by_source(test_async_db, "a.md")
        by_title = await document_chunk_crud.get_by_title(test_async_db, "Alpha")

        assert [c.content for c in by_source] == ["a1", "a2"]
        assert [c.id for c in by_title] == [c.id for c in by_source]

    @pytest.mark.asyncio
    async def test_groups_and_distinct_sources(self, test_async_db):
        await _seed(test_async_db)

        groups = await document_chunk_crud.get_source_groups(test_async_db)
        named = {g["source"]: g for g in groups if g["source"]}

        assert named["a.md"]["chunk_count"] == 2
        assert named["a.md"]["title"] == "Alpha"
        assert named["b.md"]["chunk_count"] == 1
        assert await document_chunk_crud.count_sources(test_async_db) == 3
        assert await document_chunk_crud.get_distinct_sources(test_async_db) == ["a.md", "b.md"]

    @pytest.mark.asyncio
    async def test_delete_by_source(self, test_async_db):
        await _seed(test_async_db)

        deleted = await document_chunk_crud.delete_by_source(test_async_db, "a.md")
        await test_async_db.commit()

        assert deleted == 2
        assert await document_chunk_crud.count_by_source(test_async_db, "a.md") == 0
        assert await document_chunk_crud.count(test_async_db) == 2
