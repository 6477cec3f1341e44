"""
Database models package.

Exports:
  - SessionModel: Chat session ORM model
  - ChatMessageModel, MessageRole: Chat message ORM model and role enum
  - LinkClickModel: Link click analytics ORM model
  - DocumentChunkModel: Embedded document chunk ORM model

Dependencies: sqlalchemy, chatppc.boundary.db.base
System role: Database model definitions for domain entities
"""

from chatppc.boundary.db.models.session_model import SessionModel
from chatppc.boundary.db.models.message_model import ChatMessageModel, MessageRole
from chatppc.boundary.db.models.link_click_model import LinkClickModel
from chatppc.boundary.db.models.document_chunk_model import DocumentChunkModel

__all__ = [
    "SessionModel",
    "ChatMessageModel",
    "MessageRole",
    "LinkClickModel",
    "DocumentChunkModel",
]
