"""
Dependency injection container.

Factory functions for FastAPI dependencies: services bound to the
request's database session, cached heavyweight clients, the anonymous
owner cookie and the two auth schemes (shared API key on chat routes,
provider-validated bearer token on admin routes).

Dependencies: fastapi, httpx, chatppc.configs, chatppc.application, chatppc.boundary
System role: DI container for service injection
"""

import logging
import secrets
import uuid
from functools import lru_cache
from typing import Any

import httpx
from fastapi import Depends, HTTPException, Request, Response, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.api_key import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from chatppc.application.services import (
    AdminService,
    ConversationService,
    DocumentService,
)
from chatppc.boundary.auth import SupabaseAuthClient
from chatppc.boundary.db import get_async_db
from chatppc.boundary.vdb import ChunkStore, get_embeddings
from chatppc.configs import Settings, get_settings
from chatppc.core.exceptions import AuthenticationError, ConfigurationError
from chatppc.core.ingestion.splitter import DocumentSplitter

logger = logging.getLogger(__name__)

USER_ID_COOKIE = "user_id"
USER_ID_COOKIE_MAX_AGE = 365 * 24 * 60 * 60

API_KEY_NAME = "X-API-Key"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._chunk_store = None
        self._auth_client = None

    @property
    def chunk_store(self) -> ChunkStore:
        """Get cached chunk store (builds the embeddings client on first use)."""
        if self._chunk_store is None:
            settings = get_settings()
            self._chunk_store = ChunkStore(
                embeddings=get_embeddings(),
                max_retries=settings.embeddings.max_retries,
            )
        return self._chunk_store

    @property
    def auth_client(self) -> SupabaseAuthClient:
        """Get cached auth provider client."""
        if self._auth_client is None:
            auth = get_settings().auth
            if not auth.provider_url:
                raise ConfigurationError("Auth provider is not configured")
            self._auth_client = SupabaseAuthClient(
                provider_url=auth.provider_url,
                anon_key=auth.anon_key,
                timeout=auth.timeout_seconds,
            )
        return self._auth_client

    def clear(self) -> None:
        """Clear all cached instances."""
        self._chunk_store = None
        self._auth_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_conversation_service(db: AsyncSession = Depends(get_async_db)) -> ConversationService:
    """
    Get conversation service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ConversationService: Conversation store bound to the request session
    """
    return ConversationService(db=db)


def get_admin_service(db: AsyncSession = Depends(get_async_db)) -> AdminService:
    """Get admin service instance bound to the request session."""
    return AdminService(db=db)


def get_chunk_store() -> ChunkStore:
    """Get the cached chunk store."""
    return get_service_cache().chunk_store


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    chunk_store: ChunkStore = Depends(get_chunk_store),
    settings: Settings = Depends(get_settings_dependency),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        chunk_store: Cached chunk store
        settings: Application settings (chunking parameters)

    Returns:
        DocumentService: Upload orchestrator
    """
    splitter = DocumentSplitter(
        chunk_size=settings.ingestion.chunk_size,
        chunk_overlap=settings.ingestion.chunk_overlap,
    )
    return DocumentService(db=db, chunk_store=chunk_store, splitter=splitter)


def get_auth_client() -> SupabaseAuthClient:
    """Get the cached auth provider client."""
    return get_service_cache().auth_client


def get_user_id(request: Request, response: Response) -> str:
    """
    Resolve the caller's anonymous owner id.

    Reads the user_id cookie; when absent, generates a new id and sets the
    cookie on the response.

    Returns:
        str: Owner id
    """
    user_id = request.cookies.get(USER_ID_COOKIE)
    if user_id:
        return user_id

    user_id = str(uuid.uuid4())
    response.set_cookie(
        key=USER_ID_COOKIE,
        value=user_id,
        max_age=USER_ID_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="strict",
    )
    return user_id


async def verify_api_key(
    api_key: str | None = Security(api_key_header),
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    Require the shared chat API key.

    Raises:
        AuthenticationError: Header missing, key not configured, or mismatch
    """
    expected = settings.auth.api_key
    if not expected:
        logger.warning("Chat API key is not configured; rejecting request")
        raise AuthenticationError("Unauthorized")
    if not api_key or not secrets.compare_digest(api_key, expected):
        raise AuthenticationError("Unauthorized")


async def require_admin_user(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
) -> dict[str, Any]:
    """
    Require a bearer token accepted by the auth provider.

    Returns:
        dict: Provider user payload

    Raises:
        AuthenticationError: Header missing or token rejected
        HTTPException(500): Provider unreachable
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No authorization header")

    try:
        user = await auth_client.get_user(credentials.credentials)
    except httpx.HTTPError as e:
        logger.error("Auth provider call failed", extra={"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication failed",
        )

    if user is None:
        raise AuthenticationError("Invalid token")

    logger.info("Admin authenticated", extra={"user_id": user.get("id")})
    return user
