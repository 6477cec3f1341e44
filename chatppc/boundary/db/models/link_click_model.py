"""
Link click ORM model.

Records a click on a link the assistant returned. Written by the chat UI,
aggregated by the admin analytics endpoint.

Dependencies: sqlalchemy, chatppc.boundary.db.base
System role: Link click analytics persistence
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatppc.boundary.db.base import Base, utcnow


class LinkClickModel(Base):
    """
    Link click ORM model.

    Attributes:
        id: Integer primary key
        session_id: Session the link was shown in
        message_id: Client-side id of the message containing the link
        link_url: Clicked URL
        link_text: Anchor text, if any
        clicked_at: Click timestamp (UTC)
        user_id: Clicking user, if known
    """

    __tablename__ = "link_clicks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    message_id: Mapped[str] = mapped_column(String(255), nullable=False)
    link_url: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    link_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    clicked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    session = relationship("SessionModel", back_populates="link_clicks")
