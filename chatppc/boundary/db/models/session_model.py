"""
Chat session ORM model.

Represents one conversation thread. The id is generated by the client so
the UI can start writing messages before the row exists.

Dependencies: sqlalchemy, chatppc.boundary.db.base
System role: Session persistence for chat history
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatppc.boundary.db.base import Base, TimestampMixin


class SessionModel(Base, TimestampMixin):
    """
    Chat session ORM model.

    Attributes:
        id: Client-generated session identifier
        user_id: Owning user identifier (anonymous cookie id), nullable
        messages: Ordered ChatMessageModel rows for this session
        link_clicks: LinkClickModel rows recorded against this session
        created_at: Session creation timestamp (UTC)
        updated_at: Bumped on every write to the session (UTC)
    """

    __tablename__ = "chat_sessions"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    user_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        index=True,
        doc="Owner of the session; None until a caller claims it",
    )

    messages = relationship(
        "ChatMessageModel",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="ChatMessageModel.sequence_order",
    )
    link_clicks = relationship(
        "LinkClickModel",
        back_populates="session",
        cascade="all, delete-orphan",
    )
