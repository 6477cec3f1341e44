"""
Chat message CRUD operations.

Dependencies: sqlalchemy, chatppc.boundary.db.models
System role: Ordered chat message persistence and admin aggregates
"""

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chatppc.boundary.db.CRUD.base_crud import LIKE_ESCAPE_CHAR, BaseCRUD, escape_like
from chatppc.boundary.db.models.message_model import ChatMessageModel, MessageRole


class ChatMessageCRUD(BaseCRUD[ChatMessageModel]):
    """CRUD operations for ChatMessageModel."""

    def __init__(self) -> None:
        """Initialize ChatMessageCRUD with ChatMessageModel."""
        super().__init__(ChatMessageModel)

    async def get_by_session(
        self,
        session: AsyncSession,
        session_id: str,
    ) -> Sequence[ChatMessageModel]:
        """
        Retrieve every message of a session in replay order.

        Args:
            session: Async database session
            session_id: Parent session id

        Returns:
            Messages ordered by sequence_order ascending
        """
        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.session_id == session_id)
            .order_by(ChatMessageModel.sequence_order.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_sequence_orders(self, session: AsyncSession, session_id: str) -> set[int]:
        """Return the sequence orders already stored for a session."""
        stmt = select(ChatMessageModel.sequence_order).where(
            ChatMessageModel.session_id == session_id
        )
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def create_many(
        self,
        session: AsyncSession,
        rows: Sequence[dict[str, Any]],
    ) -> list[ChatMessageModel]:
        """
        Insert several messages in one flush.

        Args:
            session: Async database session
            rows: Column value dicts for ChatMessageModel

        Returns:
            list[ChatMessageModel]: Inserted instances
        """
        instances = [ChatMessageModel(**row) for row in rows]
        session.add_all(instances)
        await session.flush()
        return instances

    async def delete_by_sessions(self, session: AsyncSession, session_ids: Sequence[str]) -> int:
        """Delete all messages of the given sessions, returning the row count."""
        if not session_ids:
            return 0
        stmt = delete(ChatMessageModel).where(ChatMessageModel.session_id.in_(session_ids))
        result = await session.execute(stmt)
        return result.rowcount

    async def get_session_ids_matching(self, session: AsyncSession, search: str) -> list[str]:
        """
        Find sessions with at least one message containing search text.

        Matching is case-insensitive and wildcard characters in the search
        text are matched literally.

        Args:
            session: Async database session
            search: Raw search text

        Returns:
            list[str]: Distinct matching session ids
        """
        pattern = f"%{escape_like(search)}%"
        stmt = (
            select(ChatMessageModel.session_id)
            .where(ChatMessageModel.content.ilike(pattern, escape=LIKE_ESCAPE_CHAR))
            .distinct()
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_sessions(
        self,
        session: AsyncSession,
        session_ids: Sequence[str],
    ) -> dict[str, int]:
        """Return {session_id: message_count} for the given sessions."""
        if not session_ids:
            return {}
        stmt = (
            select(ChatMessageModel.session_id, func.count())
            .where(ChatMessageModel.session_id.in_(session_ids))
            .group_by(ChatMessageModel.session_id)
        )
        result = await session.execute(stmt)
        return {session_id: count for session_id, count in result.all()}

    async def get_first_user_messages(
        self,
        session: AsyncSession,
        session_ids: Sequence[str],
    ) -> dict[str, ChatMessageModel]:
        """
        Return the earliest user message of each session.

        Args:
            session: Async database session
            session_ids: Sessions to look up

        Returns:
            dict mapping session id to its first user message
        """
        if not session_ids:
            return {}
        stmt = (
            select(ChatMessageModel)
            .where(
                ChatMessageModel.session_id.in_(session_ids),
                ChatMessageModel.role == MessageRole.USER.value,
            )
            .order_by(ChatMessageModel.session_id, ChatMessageModel.sequence_order.asc())
        )
        result = await session.execute(stmt)
        first: dict[str, ChatMessageModel] = {}
        for message in result.scalars().all():
            first.setdefault(message.session_id, message)
        return first

    async def count_created_since(self, session: AsyncSession, since: datetime) -> int:
        """Count messages created at or after since."""
        stmt = (
            select(func.count())
            .select_from(ChatMessageModel)
            .where(ChatMessageModel.created_at >= since)
        )
        result = await session.execute(stmt)
        return result.scalar_one()


message_crud = ChatMessageCRUD()
