"""
Chat API endpoints used by the chat UI.

Routes:
- POST /chat/store - Store the current transcript of a session
- GET /chat/history - Replay a session's messages
- GET /chat/sessions - List the caller's sessions
- DELETE /chat/sessions - Delete one (sessionId=) or all (all=true) sessions
- POST /chat/link-clicks - Log a click on a link in an assistant message

Every route requires the X-API-Key header. The caller's owner id comes from
the user_id cookie, which is issued when missing.

Dependencies: chatppc.application.services, chatppc.models, chatppc.api.deps
System role: Chat persistence HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from chatppc.api.deps import get_conversation_service, get_user_id, verify_api_key
from chatppc.application.services.conversation_service import ConversationService
from chatppc.core.exceptions import ValidationError
from chatppc.models.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    DeleteSessionsResponse,
    LinkClickRequest,
    SessionListResponse,
    SessionResponse,
    StoreMessagesRequest,
    StoreMessagesResponse,
)
from chatppc.models.common import SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/chat",
    tags=["chat"],
    dependencies=[Depends(verify_api_key)],
)


@router.post("/store", response_model=StoreMessagesResponse)
async def store_messages(
    request: StoreMessagesRequest,
    user_id: str = Depends(get_user_id),
    service: ConversationService = Depends(get_conversation_service),
) -> StoreMessagesResponse:
    """
    Store a session transcript; positions already stored are left untouched.

    Raises:
        403: Session belongs to another owner
    """
    inserted = await service.append_messages(
        request.session_id,
        [m.model_dump() for m in request.messages],
        owner_id=user_id,
    )
    return StoreMessagesResponse(session_id=request.session_id, inserted=inserted)


@router.get("/history", response_model=ChatHistoryResponse)
async def get_history(
    session_id: str | None = Query(default=None, alias="sessionId"),
    service: ConversationService = Depends(get_conversation_service),
) -> ChatHistoryResponse:
    """Get a session's messages in sequence order."""
    if not session_id:
        raise ValidationError("Session ID is required", field="sessionId")
    messages = await service.fetch_history(session_id)
    return ChatHistoryResponse(messages=[ChatMessageResponse(**m) for m in messages])


@router.get("/sessions", response_model=SessionListResponse)
async def list_sessions(
    user_id: str = Depends(get_user_id),
    service: ConversationService = Depends(get_conversation_service),
) -> SessionListResponse:
    """List the caller's sessions, most recently updated first."""
    sessions = await service.list_sessions(owner_id=user_id)
    return SessionListResponse(sessions=[SessionResponse(**s) for s in sessions])


@router.delete("/sessions", response_model=DeleteSessionsResponse)
async def delete_sessions(
    session_id: str | None = Query(default=None, alias="sessionId"),
    delete_all: bool = Query(default=False, alias="all"),
    user_id: str = Depends(get_user_id),
    service: ConversationService = Depends(get_conversation_service),
) -> DeleteSessionsResponse:
    """
    Delete one of the caller's sessions, or all of them.

    Raises:
        400: Neither sessionId nor all=true given
        404: Session not found
        403: Session belongs to another owner
    """
    if delete_all:
        deleted = await service.delete_all_sessions_for_owner(user_id)
        return DeleteSessionsResponse(message="All sessions deleted", deleted=deleted)

    if not session_id:
        raise ValidationError("Either sessionId or all=true is required")

    await service.delete_session(session_id, owner_id=user_id)
    return DeleteSessionsResponse(message="Session deleted", deleted=1)


@router.post("/link-clicks", response_model=SuccessResponse)
async def log_link_click(
    request: LinkClickRequest,
    user_id: str = Depends(get_user_id),
    service: ConversationService = Depends(get_conversation_service),
) -> SuccessResponse:
    """
    Log a link click.

    Raises:
        404: Session has not been stored yet
    """
    await service.record_link_click(
        session_id=request.session_id,
        message_id=request.message_id,
        link_url=request.link_url,
        link_text=request.link_text,
        user_id=user_id,
    )
    return SuccessResponse()
