"""
Chat message ORM model.

Dependencies: sqlalchemy, chatppc.boundary.db.base
System role: Ordered message persistence within a session
"""

import enum
from typing import Any

from sqlalchemy import JSON, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatppc.boundary.db.base import Base, CreatedAtMixin


class MessageRole(str, enum.Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    SYSTEM = "system"


class ChatMessageModel(Base, CreatedAtMixin):
    """
    Chat message ORM model.

    sequence_order is the zero-based position of the message in the
    conversation; (session_id, sequence_order) is unique so a re-sent
    transcript cannot create duplicate rows.

    Attributes:
        id: Integer primary key (store-assigned)
        session_id: Parent session id
        role: One of user/assistant/tool/system
        content: Message text
        tool_calls: Raw tool call payload, if any
        sequence_order: Replay position within the session
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "chat_messages"
    __table_args__ = (
        UniqueConstraint("session_id", "sequence_order", name="uq_chat_messages_session_order"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tool_calls: Mapped[Any] = mapped_column(JSON, nullable=True, default=None)
    sequence_order: Mapped[int] = mapped_column(Integer, nullable=False)

    session = relationship("SessionModel", back_populates="messages")
