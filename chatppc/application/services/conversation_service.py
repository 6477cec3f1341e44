"""
Conversation service orchestrator.

Persists chat transcripts for the chat UI. The UI re-sends the whole
transcript after every turn; a message's position in that list is its
sequence order, and only positions not yet stored are inserted, so
retries and re-sends never duplicate rows.

Dependencies: chatppc.boundary.db.CRUD, chatppc.core.exceptions
System role: Session and message use case orchestration
"""

import logging
from typing import Any, Mapping, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from chatppc.boundary.db.CRUD.link_click_crud import link_click_crud
from chatppc.boundary.db.CRUD.message_crud import message_crud
from chatppc.boundary.db.CRUD.session_crud import session_crud
from chatppc.boundary.db.models.message_model import MessageRole
from chatppc.boundary.db.models.session_model import SessionModel
from chatppc.core.exceptions import SessionNotFoundError, SessionOwnershipError

logger = logging.getLogger(__name__)


class ConversationService:
    """Conversation store: sessions, ordered messages and link clicks."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize conversation service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_or_touch_session(
        self,
        session_id: str,
        owner_id: str | None = None,
    ) -> SessionModel:
        """
        Insert the session if absent, otherwise bump its updated_at.

        An unowned session is claimed by the first owner that writes to it.
        Does not commit.

        Args:
            session_id: Client-generated session id
            owner_id: Caller's owner id, if known

        Returns:
            SessionModel: Created or updated session

        Raises:
            SessionOwnershipError: Session belongs to a different owner
        """
        session = await session_crud.get_by_id(self.db, session_id)
        if session is None:
            logger.info("Creating chat session", extra={"session_id": session_id})
            return await session_crud.create(self.db, id=session_id, user_id=owner_id)

        if owner_id is not None and session.user_id not in (None, owner_id):
            raise SessionOwnershipError(session_id)

        values = {}
        if owner_id is not None and session.user_id is None:
            values["user_id"] = owner_id
        return await session_crud.touch(self.db, session_id, **values)

    async def append_messages(
        self,
        session_id: str,
        messages: Sequence[Mapping[str, Any]],
        owner_id: str | None = None,
    ) -> int:
        """
        Store the transcript positions not stored yet.

        A concurrent append of the same transcript can win the race for a
        position; the unique (session_id, sequence_order) constraint then
        rejects this insert, and the stored positions are re-read once.

        Args:
            session_id: Client-generated session id
            messages: Full transcript; each item has role, content and
                optionally tool_calls
            owner_id: Caller's owner id, if known

        Returns:
            int: Number of inserted messages

        Raises:
            SessionOwnershipError: Session belongs to a different owner
        """
        for attempt in range(2):
            try:
                await self.create_or_touch_session(session_id, owner_id)
                existing = await message_crud.get_sequence_orders(self.db, session_id)

                rows = [
                    {
                        "session_id": session_id,
                        "role": MessageRole(message["role"]).value,
                        "content": message.get("content") or "",
                        "tool_calls": message.get("tool_calls"),
                        "sequence_order": index,
                    }
                    for index, message in enumerate(messages)
                    if index not in existing
                ]
                if rows:
                    await message_crud.create_many(self.db, rows)
                await self.db.commit()
                break
            except IntegrityError:
                await self.db.rollback()
                if attempt:
                    raise
                logger.info(
                    "Concurrent append detected; re-reading stored positions",
                    extra={"session_id": session_id},
                )
            except Exception:
                await self.db.rollback()
                raise

        logger.info(
            "Stored chat messages",
            extra={
                "session_id": session_id,
                "submitted": len(messages),
                "inserted": len(rows),
            },
        )
        return len(rows)

    async def fetch_history(self, session_id: str) -> list[dict]:
        """
        Get a session's messages in replay order.

        Args:
            session_id: Session id

        Returns:
            list[dict]: id, role, content, tool_calls per message; empty for
                unknown sessions
        """
        messages = await message_crud.get_by_session(self.db, session_id)
        return [
            {
                "id": m.id,
                "role": m.role,
                "content": m.content,
                "tool_calls": m.tool_calls,
            }
            for m in messages
        ]

    async def list_sessions(self, owner_id: str | None = None) -> list[dict]:
        """
        List sessions, most recently updated first.

        Args:
            owner_id: Restrict to this owner's sessions when given

        Returns:
            list[dict]: Session dicts
        """
        sessions = await session_crud.get_recent(self.db, user_id=owner_id)
        return [
            {
                "id": s.id,
                "user_id": s.user_id,
                "created_at": s.created_at,
                "updated_at": s.updated_at,
            }
            for s in sessions
        ]

    async def delete_session(self, session_id: str, owner_id: str | None = None) -> None:
        """
        Delete a session with its messages and link clicks.

        Args:
            session_id: Session id
            owner_id: Caller's owner id; None skips the ownership check

        Raises:
            SessionNotFoundError: Session does not exist
            SessionOwnershipError: Session belongs to a different owner
        """
        session = await session_crud.get_by_id(self.db, session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if owner_id is not None and session.user_id not in (None, owner_id):
            raise SessionOwnershipError(session_id)

        await self._purge([session_id])
        logger.info("Deleted chat session", extra={"session_id": session_id})

    async def delete_all_sessions_for_owner(self, owner_id: str) -> int:
        """
        Delete every session owned by owner_id.

        Returns:
            int: Number of deleted sessions
        """
        session_ids = await session_crud.get_ids_for_user(self.db, owner_id)
        deleted = await self._purge(session_ids)
        logger.info(
            "Deleted all chat sessions for owner",
            extra={"owner_id": owner_id, "deleted": deleted},
        )
        return deleted

    async def record_link_click(
        self,
        session_id: str,
        message_id: str,
        link_url: str,
        link_text: str | None = None,
        user_id: str | None = None,
    ) -> None:
        """
        Log a click on a link shown in an assistant message.

        Args:
            session_id: Session the link was shown in
            message_id: Client-side message id
            link_url: Clicked URL
            link_text: Anchor text
            user_id: Clicking user, if known

        Raises:
            SessionNotFoundError: The session has not been stored yet
        """
        if not await session_crud.exists(self.db, session_id):
            raise SessionNotFoundError(session_id)

        try:
            await link_click_crud.create(
                self.db,
                session_id=session_id,
                message_id=message_id,
                link_url=link_url,
                link_text=link_text or None,
                user_id=user_id,
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def _purge(self, session_ids: Sequence[str]) -> int:
        """Delete clicks, then messages, then sessions, and commit."""
        if not session_ids:
            return 0
        try:
            await link_click_crud.delete_by_sessions(self.db, session_ids)
            await message_crud.delete_by_sessions(self.db, session_ids)
            deleted = await session_crud.delete_many(self.db, session_ids)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return deleted
