"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from chatppc.boundary.db.CRUD import session_crud, message_crud

    # Use singleton instances
    session = await session_crud.get_by_id(db, session_id)

    # Or instantiate classes directly for custom behavior
    from chatppc.boundary.db.CRUD import SessionCRUD
    custom_crud = SessionCRUD()
"""

from chatppc.boundary.db.CRUD.base_crud import BaseCRUD, escape_like
from chatppc.boundary.db.CRUD.session_crud import SessionCRUD, session_crud
from chatppc.boundary.db.CRUD.message_crud import ChatMessageCRUD, message_crud
from chatppc.boundary.db.CRUD.link_click_crud import LinkClickCRUD, link_click_crud
from chatppc.boundary.db.CRUD.document_chunk_crud import (
    DocumentChunkCRUD,
    document_chunk_crud,
)

__all__ = [
    "BaseCRUD",
    "escape_like",
    "SessionCRUD",
    "session_crud",
    "ChatMessageCRUD",
    "message_crud",
    "LinkClickCRUD",
    "link_click_crud",
    "DocumentChunkCRUD",
    "document_chunk_crud",
]
