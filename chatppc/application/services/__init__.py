"""Service orchestrators."""

from .admin_service import AdminService
from .conversation_service import ConversationService
from .document_service import DocumentService

__all__ = [
    "AdminService",
    "ConversationService",
    "DocumentService",
]
