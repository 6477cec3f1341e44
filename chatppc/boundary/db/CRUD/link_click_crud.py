"""
Link click CRUD operations.

Dependencies: sqlalchemy, chatppc.boundary.db.models
System role: Link click analytics persistence
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from chatppc.boundary.db.CRUD.base_crud import BaseCRUD
from chatppc.boundary.db.models.link_click_model import LinkClickModel


class LinkClickCRUD(BaseCRUD[LinkClickModel]):
    """CRUD operations for LinkClickModel."""

    def __init__(self) -> None:
        """Initialize LinkClickCRUD with LinkClickModel."""
        super().__init__(LinkClickModel)

    async def get_all_recent_first(self, session: AsyncSession) -> Sequence[LinkClickModel]:
        """Retrieve every click, most recent first."""
        stmt = select(LinkClickModel).order_by(
            LinkClickModel.clicked_at.desc(), LinkClickModel.id.desc()
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_sessions(self, session: AsyncSession, session_ids: Sequence[str]) -> int:
        """Delete all clicks recorded against the given sessions."""
        if not session_ids:
            return 0
        stmt = delete(LinkClickModel).where(LinkClickModel.session_id.in_(session_ids))
        result = await session.execute(stmt)
        return result.rowcount


link_click_crud = LinkClickCRUD()
