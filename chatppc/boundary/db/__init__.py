"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, TimestampMixin, CreatedAtMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - SessionModel, ChatMessageModel, LinkClickModel, DocumentChunkModel: Core entities
  - session_crud, message_crud, link_click_crud, document_chunk_crud: CRUD singletons

Dependencies: sqlalchemy, chatppc.configs
System role: Database adapter providing persistent storage for chat
sessions, messages, link clicks and embedded document chunks.
"""

from chatppc.boundary.db.base import Base, CreatedAtMixin, TimestampMixin
from chatppc.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from chatppc.boundary.db.models import (
    ChatMessageModel,
    DocumentChunkModel,
    LinkClickModel,
    MessageRole,
    SessionModel,
)
from chatppc.boundary.db.CRUD import (
    BaseCRUD,
    document_chunk_crud,
    link_click_crud,
    message_crud,
    session_crud,
)

__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "SessionModel",
    "ChatMessageModel",
    "MessageRole",
    "LinkClickModel",
    "DocumentChunkModel",
    "BaseCRUD",
    "session_crud",
    "message_crud",
    "link_click_crud",
    "document_chunk_crud",
]
