"""
Admin service orchestrator.

Read-mostly queries behind the admin dashboard: paginated conversation
browsing with message search, grouped document browsing and deletion,
link click aggregation and headline statistics.

Dependencies: chatppc.boundary.db.CRUD, chatppc.models, chatppc.core.exceptions
System role: Admin query use case orchestration
"""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from chatppc.boundary.db.CRUD.document_chunk_crud import document_chunk_crud
from chatppc.boundary.db.CRUD.link_click_crud import link_click_crud
from chatppc.boundary.db.CRUD.message_crud import message_crud
from chatppc.boundary.db.CRUD.session_crud import session_crud
from chatppc.boundary.db.models.document_chunk_model import DocumentChunkModel
from chatppc.core.exceptions import (
    DocumentNotFoundError,
    SessionNotFoundError,
    ValidationError,
)
from chatppc.core.ingestion.sources import normalize_source
from chatppc.models.admin import (
    ConversationDetailResponse,
    ConversationListResponse,
    ConversationMessage,
    ConversationSession,
    ConversationSummary,
    FirstMessagePreview,
    LinkClickStatsResponse,
    LinkStat,
    StatsResponse,
)
from chatppc.models.common import Pagination, clamp_limit, clamp_page
from chatppc.models.document import (
    ChunkDetailResponse,
    ChunkResponse,
    DocumentChunksResponse,
    DocumentGroup,
    DocumentListResponse,
)

logger = logging.getLogger(__name__)

MAX_SEARCH_LENGTH = 1000
PREVIEW_LENGTH = 100
UNKNOWN_SOURCE = "Unknown Document"
NO_LINK_TEXT = "No text"


def _preview(content: str) -> str:
    if len(content) > PREVIEW_LENGTH:
        return content[:PREVIEW_LENGTH] + "..."
    return content


def local_midnight(now: datetime | None = None) -> datetime:
    """Start of the current day in the server's local timezone."""
    now = now or datetime.now().astimezone()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


class AdminService:
    """Admin query layer over sessions, messages, chunks and link clicks."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize admin service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    # Conversations

    async def list_conversations(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
    ) -> ConversationListResponse:
        """
        List conversations, most recently updated first.

        Args:
            page: 1-based page number (clamped to >= 1)
            limit: Page size (clamped to 1..100)
            search: Case-insensitive substring matched against message content;
                LIKE wildcards in it are matched literally

        Returns:
            ConversationListResponse: Summaries and pagination

        Raises:
            ValidationError: Search text longer than 1000 characters
        """
        if len(search) > MAX_SEARCH_LENGTH:
            raise ValidationError("Search query too long", field="search")

        page = clamp_page(page)
        limit = clamp_limit(limit)
        offset = (page - 1) * limit

        session_ids = None
        term = search.strip()
        if term:
            session_ids = await message_crud.get_session_ids_matching(self.db, term)
            if not session_ids:
                return ConversationListResponse(
                    conversations=[],
                    pagination=Pagination.build(page, limit, 0),
                )

        sessions = await session_crud.get_recent(
            self.db, ids=session_ids, limit=limit, offset=offset
        )
        total = await session_crud.count_filtered(self.db, ids=session_ids)

        page_ids = [s.id for s in sessions]
        counts = await message_crud.count_by_sessions(self.db, page_ids)
        first_messages = await message_crud.get_first_user_messages(self.db, page_ids)

        conversations = []
        for s in sessions:
            first = first_messages.get(s.id)
            conversations.append(
                ConversationSummary(
                    id=s.id,
                    created_at=s.created_at,
                    updated_at=s.updated_at,
                    message_count=counts.get(s.id, 0),
                    first_message=(
                        FirstMessagePreview(content=_preview(first.content), role=first.role)
                        if first is not None
                        else None
                    ),
                )
            )

        return ConversationListResponse(
            conversations=conversations,
            pagination=Pagination.build(page, limit, total),
        )

    async def get_conversation(self, conversation_id: str) -> ConversationDetailResponse:
        """
        Get a conversation with all of its messages.

        Raises:
            SessionNotFoundError: Conversation does not exist
        """
        session = await session_crud.get_by_id(self.db, conversation_id)
        if session is None:
            raise SessionNotFoundError(conversation_id)

        messages = await message_crud.get_by_session(self.db, conversation_id)
        return ConversationDetailResponse(
            session=ConversationSession(
                id=session.id,
                created_at=session.created_at,
                updated_at=session.updated_at,
            ),
            messages=[
                ConversationMessage(
                    id=m.id,
                    role=m.role,
                    content=m.content,
                    tool_calls=m.tool_calls,
                    sequence_order=m.sequence_order,
                    created_at=m.created_at,
                )
                for m in messages
            ],
            message_count=len(messages),
        )

    async def delete_conversation(self, conversation_id: str) -> None:
        """
        Delete a conversation with its messages and link clicks.

        Raises:
            SessionNotFoundError: Conversation does not exist
        """
        if not await session_crud.exists(self.db, conversation_id):
            raise SessionNotFoundError(conversation_id)

        ids = [conversation_id]
        try:
            await link_click_crud.delete_by_sessions(self.db, ids)
            await message_crud.delete_by_sessions(self.db, ids)
            await session_crud.delete_many(self.db, ids)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info("Admin deleted conversation", extra={"session_id": conversation_id})

    # Documents

    async def list_documents(self, page: int = 1, limit: int = 20) -> DocumentListResponse:
        """
        List documents grouped by source with chunk counts.

        Args:
            page: 1-based page number (clamped to >= 1)
            limit: Groups per page (clamped to 1..100)

        Returns:
            DocumentListResponse: Groups, totals and pagination
        """
        page = clamp_page(page)
        limit = clamp_limit(limit)

        groups = await document_chunk_crud.get_source_groups(
            self.db, limit=limit, offset=(page - 1) * limit
        )
        total_documents = await document_chunk_crud.count_sources(self.db)
        total_chunks = await document_chunk_crud.count(self.db)

        return DocumentListResponse(
            total_documents=total_documents,
            total_chunks=total_chunks,
            documents=[
                DocumentGroup(
                    source=group["source"] or UNKNOWN_SOURCE,
                    title=group["title"] or group["source"] or "Untitled",
                    chunk_count=group["chunk_count"],
                )
                for group in groups
            ],
            pagination=Pagination.build(page, limit, total_documents),
        )

    async def list_document_sources(self) -> list[str]:
        """Sorted distinct document sources."""
        return await document_chunk_crud.get_distinct_sources(self.db)

    async def get_document_chunks(self, identifier: str) -> DocumentChunksResponse:
        """
        Resolve a document identifier to its chunks.

        An all-digit identifier selects that single chunk by id. Anything
        else matches the normalized metadata.source, falling back to
        metadata.title as given.

        Args:
            identifier: Chunk id, source or title (already URL-decoded)

        Returns:
            DocumentChunksResponse: Matching chunks ordered by id

        Raises:
            DocumentNotFoundError: Nothing matches
        """
        if identifier.isdigit() and identifier.isascii():
            chunk = await document_chunk_crud.get_by_id(self.db, int(identifier))
            if chunk is None:
                raise DocumentNotFoundError(identifier)
            return DocumentChunksResponse(
                source=chunk.source or UNKNOWN_SOURCE,
                chunk_count=1,
                chunks=[self._chunk_response(chunk, 1)],
            )

        source = normalize_source(identifier)
        chunks = await document_chunk_crud.get_by_source(self.db, source)
        if not chunks:
            chunks = await document_chunk_crud.get_by_title(self.db, identifier)
            source = identifier
        if not chunks:
            raise DocumentNotFoundError(identifier)

        return DocumentChunksResponse(
            source=source,
            chunk_count=len(chunks),
            chunks=[self._chunk_response(chunk, i) for i, chunk in enumerate(chunks, start=1)],
        )

    async def get_chunk(self, raw_id: str) -> ChunkDetailResponse:
        """
        Get one chunk by id.

        Args:
            raw_id: Chunk id as received in the URL

        Raises:
            ValidationError: raw_id is not a positive integer
            DocumentNotFoundError: No chunk with that id
        """
        if not (raw_id.isdigit() and raw_id.isascii()) or int(raw_id) <= 0:
            raise ValidationError(
                "Invalid document ID. Must be a positive integer.", field="id"
            )

        chunk = await document_chunk_crud.get_by_id(self.db, int(raw_id))
        if chunk is None:
            raise DocumentNotFoundError(raw_id)

        return ChunkDetailResponse(
            id=chunk.id,
            source=chunk.source or UNKNOWN_SOURCE,
            title=chunk.title or chunk.source or f"Chunk {chunk.id}",
            content=chunk.content or "",
            metadata=chunk.chunk_metadata or {},
        )

    async def delete_document(self, source: str) -> int:
        """
        Delete every chunk of a source.

        Returns:
            int: Number of deleted chunks

        Raises:
            ValidationError: Blank source
            DocumentNotFoundError: No chunk has that source
        """
        if not source or not source.strip():
            raise ValidationError("Document source is required", field="source")
        source = normalize_source(source)

        chunk_count = await document_chunk_crud.count_by_source(self.db, source)
        if chunk_count == 0:
            raise DocumentNotFoundError(source)

        try:
            await document_chunk_crud.delete_by_source(self.db, source)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Admin deleted document",
            extra={"source": source, "deleted_chunks": chunk_count},
        )
        return chunk_count

    @staticmethod
    def _chunk_response(chunk: DocumentChunkModel, index: int) -> ChunkResponse:
        return ChunkResponse(
            id=str(chunk.id),
            chunk_index=index,
            content=chunk.content or "",
            metadata=chunk.chunk_metadata or {},
        )

    # Analytics

    async def list_link_clicks(
        self,
        page: int = 1,
        limit: int = 5,
        search: str = "",
    ) -> LinkClickStatsResponse:
        """
        Aggregate link clicks by URL.

        Each URL carries its click count, last click time and the text of its
        most recent click. Links are sorted by click count, ties broken by
        most recent click.

        Args:
            page: 1-based page number (clamped to >= 1)
            limit: Links per page (clamped to 1..100)
            search: Case-insensitive substring matched against text or URL

        Returns:
            LinkClickStatsResponse: Page of links, click totals and pagination
        """
        page = clamp_page(page)
        limit = clamp_limit(limit)

        clicks = await link_click_crud.get_all_recent_first(self.db)

        stats: dict[str, dict] = {}
        for click in clicks:
            text = click.link_text or NO_LINK_TEXT
            stat = stats.get(click.link_url)
            if stat is None:
                stats[click.link_url] = {
                    "url": click.link_url,
                    "text": text,
                    "click_count": 1,
                    "last_clicked": click.clicked_at,
                }
                continue
            stat["click_count"] += 1
            if click.clicked_at > stat["last_clicked"]:
                stat["last_clicked"] = click.clicked_at
                stat["text"] = text

        links = sorted(
            stats.values(),
            key=lambda s: (s["click_count"], s["last_clicked"]),
            reverse=True,
        )

        term = search.strip().lower()
        if term:
            links = [
                link
                for link in links
                if term in link["text"].lower() or term in link["url"].lower()
            ]

        offset = (page - 1) * limit
        return LinkClickStatsResponse(
            most_clicked_links=[LinkStat(**link) for link in links[offset : offset + limit]],
            total_clicks=len(clicks),
            unique_links=len(stats),
            pagination=Pagination.build(page, limit, len(links)),
        )

    async def get_stats(self, now: datetime | None = None) -> StatsResponse:
        """
        Headline dashboard statistics.

        Args:
            now: Reference time (defaults to the current local time)

        Returns:
            StatsResponse: Conversation count, sessions active in the last
                24 hours, messages since local midnight and average messages
                per session
        """
        now = now or datetime.now().astimezone()

        total_conversations = await session_crud.count(self.db)
        active_sessions = await session_crud.count_filtered(
            self.db, updated_since=(now - timedelta(days=1)).astimezone(timezone.utc)
        )
        midnight = local_midnight(now).astimezone(timezone.utc)
        messages_today = await message_crud.count_created_since(self.db, midnight)
        total_messages = await message_crud.count(self.db)

        average_length = 0.0
        if total_conversations:
            average_length = round(total_messages / total_conversations, 2)

        return StatsResponse(
            total_conversations=total_conversations,
            active_sessions=active_sessions,
            messages_today=messages_today,
            average_length=average_length,
        )
