"""API routers."""

from .admin_analytics import router as admin_analytics_router
from .admin_conversations import router as admin_conversations_router
from .admin_documents import router as admin_documents_router
from .chat import router as chat_router
from .health import router as health_router

__all__ = [
    "admin_analytics_router",
    "admin_conversations_router",
    "admin_documents_router",
    "chat_router",
    "health_router",
]
