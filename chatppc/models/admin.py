"""
Admin domain models and schemas.

Conversation browser, link click analytics and dashboard statistics.

Dependencies: pydantic, chatppc.models.common
System role: Admin API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from chatppc.models.common import Pagination


class FirstMessagePreview(BaseModel):
    """Truncated first user message of a conversation."""

    content: str
    role: str


class ConversationSummary(BaseModel):
    """Conversation row in the admin listing."""

    id: str
    created_at: datetime
    updated_at: datetime
    message_count: int
    first_message: FirstMessagePreview | None = None


class ConversationListResponse(BaseModel):
    """Paginated conversation listing."""

    conversations: list[ConversationSummary]
    pagination: Pagination


class ConversationSession(BaseModel):
    id: str
    created_at: datetime
    updated_at: datetime


class ConversationMessage(BaseModel):
    """Message in the admin conversation view."""

    id: int
    role: str
    content: str
    tool_calls: Any | None = None
    sequence_order: int
    created_at: datetime


class ConversationDetailResponse(BaseModel):
    """A conversation and all its messages."""

    session: ConversationSession
    messages: list[ConversationMessage]
    message_count: int


class LinkStat(BaseModel):
    """Click totals for one URL."""

    url: str
    text: str
    click_count: int
    last_clicked: datetime


class LinkClickStatsResponse(BaseModel):
    """Paginated most-clicked links."""

    most_clicked_links: list[LinkStat]
    total_clicks: int
    unique_links: int
    pagination: Pagination


class StatsResponse(BaseModel):
    """Dashboard counters."""

    total_conversations: int
    active_sessions: int
    messages_today: int
    average_length: float
