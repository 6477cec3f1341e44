"""
Tests for AdminService against an in-memory database.

System role: Verification of admin pagination, search, documents and analytics
"""

from datetime import datetime, timedelta, timezone

import pytest

from chatppc.application.services.admin_service import AdminService, local_midnight
from chatppc.boundary.db.CRUD.document_chunk_crud import document_chunk_crud
from chatppc.boundary.db.CRUD.link_click_crud import link_click_crud
from chatppc.boundary.db.CRUD.message_crud import message_crud
from chatppc.boundary.db.CRUD.session_crud import session_crud
from chatppc.core.exceptions import (
    DocumentNotFoundError,
    SessionNotFoundError,
    ValidationError,
)

BASE_TIME = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
HASH = "c" * 64


@pytest.fixture
def service(test_async_db) -> AdminService:
    return AdminService(test_async_db)


async def seed_conversations(db, count):
    for i in range(count):
        sid = f"conv-{i:02d}"
        await session_crud.create(db, id=sid, updated_at=BASE_TIME + timedelta(hours=i))
        await message_crud.create_many(
            db,
            [
                {"session_id": sid, "role": "user", "content": f"question {i}", "sequence_order": 0},
                {"session_id": sid, "role": "assistant", "content": "answer", "sequence_order": 1},
            ],
        )
    await db.commit()


async def seed_chunks(db):
    await document_chunk_crud.create_many(
        db,
        contents=["a1", "a2", "b1"],
        metadatas=[
            {"source": "a.md", "hash": HASH, "title": "Asthma"},
            {"source": "a.md", "hash": HASH, "title": "Asthma"},
            {"source": "b.md", "hash": HASH},
        ],
    )
    await db.commit()


class TestListConversations:
    """Paginated conversation browsing."""

    @pytest.mark.asyncio
    async def test_first_page_of_twelve(self, service, test_async_db):
        await seed_conversations(test_async_db, 12)

        result = await service.list_conversations(page=1, limit=5)

        assert result.pagination.model_dump() == {"page": 1, "limit": 5, "total": 12, "pages": 3}
        assert len(result.conversations) == 5
        assert [c.id for c in result.conversations] == [
            "conv-11",
            "conv-10",
            "conv-09",
            "conv-08",
            "conv-07",
        ]
        assert result.conversations[0].message_count == 2
        assert result.conversations[0].first_message.content == "question 11"
        assert result.conversations[0].first_message.role == "user"

    @pytest.mark.asyncio
    async def test_last_page_and_clamping(self, service, test_async_db):
        await seed_conversations(test_async_db, 12)

        last = await service.list_conversations(page=3, limit=5)
        clamped = await service.list_conversations(page=0, limit=1000)

        assert [c.id for c in last.conversations] == ["conv-01", "conv-00"]
        assert clamped.pagination.page == 1
        assert clamped.pagination.limit == 100
        assert clamped.pagination.pages == 1

    @pytest.mark.asyncio
    async def test_first_message_is_truncated(self, service, test_async_db):
        await session_crud.create(test_async_db, id="long")
        await message_crud.create(
            test_async_db, session_id="long", role="user", content="x" * 150, sequence_order=0
        )
        await test_async_db.commit()

        result = await service.list_conversations()

        assert result.conversations[0].first_message.content == "x" * 100 + "..."

    @pytest.mark.asyncio
    async def test_search_filters_and_escapes(self, service, test_async_db):
        await seed_conversations(test_async_db, 3)
        await session_crud.create(test_async_db, id="pct")
        await message_crud.create(
            test_async_db, session_id="pct", role="user", content="reduce by 50%", sequence_order=0
        )
        await test_async_db.commit()

        by_text = await service.list_conversations(search="QUESTION 1")
        by_wildcard = await service.list_conversations(search="%")
        nothing = await service.list_conversations(search="zebra")

        assert [c.id for c in by_text.conversations] == ["conv-01"]
        assert [c.id for c in by_wildcard.conversations] == ["pct"]
        assert nothing.conversations == []
        assert nothing.pagination.total == 0
        assert nothing.pagination.pages == 0

    @pytest.mark.asyncio
    async def test_search_too_long(self, service):
        with pytest.raises(ValidationError):
            await service.list_conversations(search="a" * 1001)


class TestConversationDetail:
    """Single conversation view and deletion."""

    @pytest.mark.asyncio
    async def test_get_conversation(self, service, test_async_db):
        await seed_conversations(test_async_db, 1)

        detail = await service.get_conversation("conv-00")

        assert detail.session.id == "conv-00"
        assert detail.message_count == 2
        assert [m.sequence_order for m in detail.messages] == [0, 1]

    @pytest.mark.asyncio
    async def test_missing_conversation(self, service):
        with pytest.raises(SessionNotFoundError):
            await service.get_conversation("nope")
        with pytest.raises(SessionNotFoundError):
            await service.delete_conversation("nope")

    @pytest.mark.asyncio
    async def test_delete_conversation(self, service, test_async_db):
        await seed_conversations(test_async_db, 2)

        await service.delete_conversation("conv-00")

        assert await message_crud.get_by_session(test_async_db, "conv-00") == []
        assert await session_crud.count(test_async_db) == 1


class TestDocuments:
    """Document browsing and deletion."""

    @pytest.mark.asyncio
    async def test_list_documents(self, service, test_async_db):
        await seed_chunks(test_async_db)

        result = await service.list_documents()

        assert result.total_documents == 2
        assert result.total_chunks == 3
        assert [(d.source, d.title, d.chunk_count) for d in result.documents] == [
            ("a.md", "Asthma", 2),
            ("b.md", "b.md", 1),
        ]
        assert result.pagination.total == 2

    @pytest.mark.asyncio
    async def test_sources(self, service, test_async_db):
        await seed_chunks(test_async_db)

        assert await service.list_document_sources() == ["a.md", "b.md"]

    @pytest.mark.asyncio
    async def test_identifier_resolution(self, service, test_async_db):
        await seed_chunks(test_async_db)
        first_id = (await document_chunk_crud.get_by_source(test_async_db, "a.md"))[0].id

        by_id = await service.get_document_chunks(str(first_id))
        by_source = await service.get_document_chunks("a.md")
        by_title = await service.get_document_chunks("Asthma")

        assert by_id.chunk_count == 1
        assert by_id.source == "a.md"
        assert by_id.chunks[0].id == str(first_id)
        assert [c.chunk_index for c in by_source.chunks] == [1, 2]
        assert [c.content for c in by_title.chunks] == ["a1", "a2"]
        assert by_title.source == "Asthma"

        with pytest.raises(DocumentNotFoundError):
            await service.get_document_chunks("missing.md")
        with pytest.raises(DocumentNotFoundError):
            await service.get_document_chunks("99999")

    @pytest.mark.asyncio
    async def test_get_chunk(self, service, test_async_db):
        await seed_chunks(test_async_db)
        chunk_id = (await document_chunk_crud.get_by_source(test_async_db, "b.md"))[0].id

        chunk = await service.get_chunk(str(chunk_id))

        assert chunk.id == chunk_id
        assert chunk.title == "b.md"
        assert chunk.content == "b1"
        for bad in ["abc", "-1", "0", "1.5"]:
            with pytest.raises(ValidationError):
                await service.get_chunk(bad)
        with pytest.raises(DocumentNotFoundError):
            await service.get_chunk("424242")

    @pytest.mark.asyncio
    async def test_delete_document(self, service, test_async_db):
        await seed_chunks(test_async_db)

        assert await service.delete_document("a.md") == 2
        assert await service.list_document_sources() == ["b.md"]
        with pytest.raises(ValidationError):
            await service.delete_document("  ")
        with pytest.raises(DocumentNotFoundError):
            await service.delete_document("a.md")

    @pytest.mark.asyncio
    async def test_identifiers_are_normalized_like_ingestion(self, service, test_async_db):
        await document_chunk_crud.create_many(
            test_async_db,
            contents=["n1", "n2"],
            metadatas=[
                {"source": "docs/nested.md", "hash": HASH},
                {"source": "docs/nested.md", "hash": HASH},
            ],
        )
        await test_async_db.commit()

        found = await service.get_document_chunks("docs\\nested.md")
        assert found.source == "docs/nested.md"
        assert found.chunk_count == 2

        assert await service.delete_document("docs//nested.md") == 2
        assert await service.list_document_sources() == []


class TestAnalytics:
    """Link click aggregation and dashboard stats."""

    @pytest.mark.asyncio
    async def test_link_clicks_grouped_and_sorted(self, service, test_async_db):
        await session_crud.create(test_async_db, id="s1")
        clicks = [
            ("https://a", "old A", 0),
            ("https://a", "new A", 10),
            ("https://b", None, 5),
            ("https://c", "C", 20),
        ]
        for url, text, minutes in clicks:
            await link_click_crud.create(
                test_async_db,
                session_id="s1",
                message_id="m",
                link_url=url,
                link_text=text,
                clicked_at=BASE_TIME + timedelta(minutes=minutes),
            )
        await test_async_db.commit()

        result = await service.list_link_clicks(page=1, limit=5)

        assert [link.url for link in result.most_clicked_links] == [
            "https://a",
            "https://c",
            "https://b",
        ]
        assert result.most_clicked_links[0].click_count == 2
        assert result.most_clicked_links[0].text == "new A"
        assert result.most_clicked_links[2].text == "No text"
        assert result.total_clicks == 4
        assert result.unique_links == 3
        assert result.pagination.model_dump() == {"page": 1, "limit": 5, "total": 3, "pages": 1}

        filtered = await service.list_link_clicks(search="NO TEXT")
        assert [link.url for link in filtered.most_clicked_links] == ["https://b"]

    @pytest.mark.asyncio
    async def test_stats(self, service, test_async_db):
        now = datetime.now().astimezone()
        utc_now = now.astimezone(timezone.utc)
        await session_crud.create(test_async_db, id="recent", updated_at=utc_now)
        await session_crud.create(test_async_db, id="stale", updated_at=utc_now - timedelta(days=3))
        await message_crud.create_many(
            test_async_db,
            [
                {"session_id": "recent", "role": "user", "content": "a", "sequence_order": 0},
                {"session_id": "recent", "role": "assistant", "content": "b", "sequence_order": 1},
                {
                    "session_id": "stale",
                    "role": "user",
                    "content": "c",
                    "sequence_order": 0,
                    "created_at": (local_midnight(now) - timedelta(hours=1)).astimezone(timezone.utc),
                },
            ],
        )
        await test_async_db.commit()

        stats = await service.get_stats(now=now)

        assert stats.total_conversations == 2
        assert stats.active_sessions == 1
        assert stats.messages_today == 2
        assert stats.average_length == 1.5

    @pytest.mark.asyncio
    async def test_stats_empty(self, service):
        stats = await service.get_stats()

        assert stats.total_conversations == 0
        assert stats.average_length == 0.0
