"""
Tests for ConversationService against an in-memory database.

System role: Verification of transcript storage, ownership and deletion
"""

from unittest.mock import patch

import pytest

from chatppc.application.services.conversation_service import ConversationService
from chatppc.boundary.db.CRUD.link_click_crud import link_click_crud
from chatppc.boundary.db.CRUD.message_crud import message_crud
from chatppc.boundary.db.CRUD.session_crud import session_crud
from chatppc.core.exceptions import SessionNotFoundError, SessionOwnershipError


def transcript(*contents):
    roles = ["user", "assistant"]
    return [{"role": roles[i % 2], "content": c} for i, c in enumerate(contents)]


@pytest.fixture
def service(test_async_db) -> ConversationService:
    return ConversationService(test_async_db)


class TestAppendMessages:
    """Incremental transcript storage."""

    @pytest.mark.asyncio
    async def test_creates_session_and_stores_contiguous_orders(self, service, test_async_db):
        inserted = await service.append_messages("s1", transcript("hi", "hello", "how?"))

        messages = await message_crud.get_by_session(test_async_db, "s1")
        assert inserted == 3
        assert [m.sequence_order for m in messages] == [0, 1, 2]
        assert [m.role for m in messages] == ["user", "assistant", "user"]
        assert await session_crud.exists(test_async_db, "s1")

    @pytest.mark.asyncio
    async def test_resending_transcript_only_adds_new_positions(self, service, test_async_db):
        await service.append_messages("s1", transcript("hi", "hello"))

        inserted = await service.append_messages("s1", transcript("hi", "hello", "more", "ok"))
        repeated = await service.append_messages("s1", transcript("hi", "hello", "more", "ok"))

        history = await service.fetch_history("s1")
        assert inserted == 2
        assert repeated == 0
        assert [m["content"] for m in history] == ["hi", "hello", "more", "ok"]

    @pytest.mark.asyncio
    async def test_stored_positions_are_never_rewritten(self, service):
        await service.append_messages("s1", transcript("original"))

        await service.append_messages("s1", transcript("edited", "reply"))

        history = await service.fetch_history("s1")
        assert [m["content"] for m in history] == ["original", "reply"]

    @pytest.mark.asyncio
    async def test_concurrent_append_rereads_stored_positions(self, service, test_async_db):
        await service.append_messages("s1", transcript("hi", "hello"))

        real_get_orders = message_crud.get_sequence_orders
        calls = []

        async def stale_first_read(session, session_id):
            calls.append(session_id)
            if len(calls) == 1:
                # Another request stored these positions after this read
                return set()
            return await real_get_orders(session, session_id)

        with patch.object(message_crud, "get_sequence_orders", side_effect=stale_first_read):
            inserted = await service.append_messages("s1", transcript("hi", "hello", "more"))

        history = await service.fetch_history("s1")
        assert len(calls) == 2
        assert inserted == 1
        assert [m["content"] for m in history] == ["hi", "hello", "more"]

    @pytest.mark.asyncio
    async def test_tool_calls_round_trip(self, service):
        calls = [{"id": "c1", "name": "search", "args": {"q": "asthma"}}]
        await service.append_messages(
            "s1",
            [{"role": "user", "content": "q"}, {"role": "assistant", "content": "", "tool_calls": calls}],
        )

        history = await service.fetch_history("s1")
        assert history[1]["tool_calls"] == calls

    @pytest.mark.asyncio
    async def test_unowned_session_is_claimed_then_protected(self, service, test_async_db):
        await service.append_messages("s1", transcript("hi"))
        await service.append_messages("s1", transcript("hi", "yo"), owner_id="alice")

        session = await session_crud.get_by_id(test_async_db, "s1")
        assert session.user_id == "alice"

        with pytest.raises(SessionOwnershipError):
            await service.append_messages("s1", transcript("hi", "yo", "x"), owner_id="bob")
        assert len(await service.fetch_history("s1")) == 2


class TestSessions:
    """Listing and deletion."""

    @pytest.mark.asyncio
    async def test_list_sessions_scoped_to_owner(self, service):
        await service.append_messages("a1", transcript("x"), owner_id="alice")
        await service.append_messages("b1", transcript("x"), owner_id="bob")
        await service.append_messages("a2", transcript("x"), owner_id="alice")

        sessions = await service.list_sessions(owner_id="alice")

        assert {s["id"] for s in sessions} == {"a1", "a2"}
        assert len(await service.list_sessions()) == 3

    @pytest.mark.asyncio
    async def test_delete_session_removes_messages_and_clicks(self, service, test_async_db):
        await service.append_messages("s1", transcript("hi", "see https://x"), owner_id="alice")
        await service.record_link_click("s1", "m2", "https://x", "x", user_id="alice")

        await service.delete_session("s1", owner_id="alice")

        assert await message_crud.get_by_session(test_async_db, "s1") == []
        assert await service.fetch_history("s1") == []
        assert await link_click_crud.count(test_async_db) == 0
        assert not await session_crud.exists(test_async_db, "s1")

    @pytest.mark.asyncio
    async def test_delete_session_errors(self, service):
        await service.append_messages("s1", transcript("hi"), owner_id="alice")

        with pytest.raises(SessionNotFoundError):
            await service.delete_session("missing", owner_id="alice")
        with pytest.raises(SessionOwnershipError):
            await service.delete_session("s1", owner_id="bob")

    @pytest.mark.asyncio
    async def test_delete_all_sessions_for_owner(self, service):
        await service.append_messages("a1", transcript("x"), owner_id="alice")
        await service.append_messages("a2", transcript("x"), owner_id="alice")
        await service.append_messages("b1", transcript("x"), owner_id="bob")

        deleted = await service.delete_all_sessions_for_owner("alice")

        assert deleted == 2
        assert [s["id"] for s in await service.list_sessions()] == ["b1"]
        assert await service.delete_all_sessions_for_owner("nobody") == 0


class TestLinkClicks:
    """Link click logging."""

    @pytest.mark.asyncio
    async def test_click_on_unknown_session_is_rejected(self, service):
        with pytest.raises(SessionNotFoundError):
            await service.record_link_click("missing", "m1", "https://x")

    @pytest.mark.asyncio
    async def test_click_is_recorded(self, service, test_async_db):
        await service.append_messages("s1", transcript("hi"))

        await service.record_link_click("s1", "m1", "https://x", "")

        clicks = await link_click_crud.get_all_recent_first(test_async_db)
        assert len(clicks) == 1
        assert clicks[0].link_text is None
