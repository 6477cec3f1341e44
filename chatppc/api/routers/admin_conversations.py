"""
Admin conversation API endpoints.

Routes:
- GET /admin/conversations - Paginated, searchable conversation list
- GET /admin/conversations/{id} - Conversation with all messages
- DELETE /admin/conversations/{id} - Delete a conversation

Dependencies: chatppc.application.services, chatppc.models, chatppc.api.deps
System role: Admin conversation browser HTTP API
"""

from fastapi import APIRouter, Depends

from chatppc.api.deps import get_admin_service, require_admin_user
from chatppc.application.services.admin_service import AdminService
from chatppc.models.admin import ConversationDetailResponse, ConversationListResponse
from chatppc.models.common import SuccessResponse

router = APIRouter(
    prefix="/admin/conversations",
    tags=["admin"],
    dependencies=[Depends(require_admin_user)],
)


@router.get("", response_model=ConversationListResponse)
async def list_conversations(
    page: int = 1,
    limit: int = 10,
    search: str = "",
    service: AdminService = Depends(get_admin_service),
) -> ConversationListResponse:
    """
    List conversations, most recently updated first.

    Args:
        page: Page number (clamped to >= 1)
        limit: Page size (clamped to 1..100)
        search: Case-insensitive message content filter

    Raises:
        400: Search text longer than 1000 characters
    """
    return await service.list_conversations(page=page, limit=limit, search=search)


@router.get("/{conversation_id}", response_model=ConversationDetailResponse)
async def get_conversation(
    conversation_id: str,
    service: AdminService = Depends(get_admin_service),
) -> ConversationDetailResponse:
    """Get a conversation and its messages (404 when absent)."""
    return await service.get_conversation(conversation_id)


@router.delete("/{conversation_id}", response_model=SuccessResponse)
async def delete_conversation(
    conversation_id: str,
    service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    """Delete a conversation with its messages (404 when absent)."""
    await service.delete_conversation(conversation_id)
    return SuccessResponse(message=f"Successfully deleted conversation {conversation_id}")
