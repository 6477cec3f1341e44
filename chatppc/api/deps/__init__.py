"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_admin_service,
    get_auth_client,
    get_chunk_store,
    get_conversation_service,
    get_document_service,
    get_service_cache,
    get_settings_dependency,
    get_user_id,
    require_admin_user,
    verify_api_key,
)

__all__ = [
    "get_admin_service",
    "get_auth_client",
    "get_chunk_store",
    "get_conversation_service",
    "get_document_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_user_id",
    "require_admin_user",
    "verify_api_key",
]
