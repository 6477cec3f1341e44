"""
Session CRUD operations.

Provides Create, Read, Update, Delete operations for SessionModel
with session-specific query methods.

Dependencies: sqlalchemy, chatppc.boundary.db.models
System role: Chat session persistence operations
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chatppc.boundary.db.base import utcnow
from chatppc.boundary.db.CRUD.base_crud import BaseCRUD
from chatppc.boundary.db.models.session_model import SessionModel


class SessionCRUD(BaseCRUD[SessionModel]):
    """
    CRUD operations for SessionModel.

    Extends BaseCRUD with owner scoping, timestamp bumps and
    recency-ordered listing.
    """

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def touch(
        self,
        session: AsyncSession,
        id: str,
        **values,
    ) -> SessionModel | None:
        """
        Bump updated_at, optionally setting other columns at the same time.

        Args:
            session: Async database session
            id: Session id
            **values: Extra column values to write (e.g. user_id)

        Returns:
            Updated SessionModel if found, None otherwise
        """
        return await self.update_by_id(session, id, updated_at=utcnow(), **values)

    async def get_recent(
        self,
        session: AsyncSession,
        user_id: str | None = None,
        ids: Sequence[str] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[SessionModel]:
        """
        Retrieve sessions ordered by most recently updated first.

        Args:
            session: Async database session
            user_id: Restrict to sessions owned by this user
            ids: Restrict to these session ids
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip

        Returns:
            Sequence of SessionModels
        """
        stmt = select(SessionModel)
        if user_id is not None:
            stmt = stmt.where(SessionModel.user_id == user_id)
        if ids is not None:
            stmt = stmt.where(SessionModel.id.in_(ids))
        stmt = stmt.order_by(SessionModel.updated_at.desc(), SessionModel.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_filtered(
        self,
        session: AsyncSession,
        ids: Sequence[str] | None = None,
        updated_since: datetime | None = None,
    ) -> int:
        """
        Count sessions, optionally restricted to ids or recent activity.

        Args:
            session: Async database session
            ids: Restrict to these session ids
            updated_since: Only count sessions updated at or after this time

        Returns:
            int: Matching session count
        """
        stmt = select(func.count()).select_from(SessionModel)
        if ids is not None:
            stmt = stmt.where(SessionModel.id.in_(ids))
        if updated_since is not None:
            stmt = stmt.where(SessionModel.updated_at >= updated_since)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def get_ids_for_user(self, session: AsyncSession, user_id: str) -> list[str]:
        """Return ids of every session owned by user_id."""
        stmt = select(SessionModel.id).where(SessionModel.user_id == user_id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def delete_many(self, session: AsyncSession, ids: Sequence[str]) -> int:
        """
        Delete session rows by id.

        Callers remove child rows first; bulk deletes bypass ORM cascades.

        Returns:
            int: Number of deleted sessions
        """
        if not ids:
            return 0
        stmt = delete(SessionModel).where(SessionModel.id.in_(ids))
        result = await session.execute(stmt)
        return result.rowcount


session_crud = SessionCRUD()
