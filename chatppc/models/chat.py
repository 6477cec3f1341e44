"""
Chat domain models and schemas.

Request/response schemas for the chat UI endpoints: transcript storage,
history replay, session listing/deletion and link click logging. Request
bodies accept the UI's camelCase keys.

Dependencies: pydantic, chatppc.boundary.db.models
System role: Chat API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from chatppc.boundary.db.models.message_model import MessageRole


class ChatMessageIn(BaseModel):
    """One message of a submitted transcript."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    role: MessageRole
    content: str = ""
    tool_calls: Any | None = Field(default=None, alias="toolCalls")


class StoreMessagesRequest(BaseModel):
    """Full or partial transcript submitted after each turn."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", min_length=1, max_length=255)
    messages: list[ChatMessageIn] = Field(min_length=1)


class StoreMessagesResponse(BaseModel):
    """Result of storing a transcript."""

    success: bool = True
    session_id: str
    inserted: int = Field(description="Number of newly stored messages")


class ChatMessageResponse(BaseModel):
    """Stored message as replayed to the chat UI."""

    id: int
    role: str
    content: str
    tool_calls: Any | None = None


class ChatHistoryResponse(BaseModel):
    """Messages of one session in sequence order."""

    messages: list[ChatMessageResponse]


class SessionResponse(BaseModel):
    """Chat session summary."""

    id: str
    user_id: str | None = None
    created_at: datetime
    updated_at: datetime


class SessionListResponse(BaseModel):
    """Sessions ordered by most recent activity."""

    sessions: list[SessionResponse]


class DeleteSessionsResponse(BaseModel):
    """Result of deleting one or all sessions."""

    success: bool = True
    message: str
    deleted: int


class LinkClickRequest(BaseModel):
    """Click on a link inside an assistant message."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", min_length=1)
    message_id: str = Field(alias="messageId", min_length=1)
    link_url: str = Field(alias="linkUrl", min_length=1)
    link_text: str | None = Field(default=None, alias="linkText")
