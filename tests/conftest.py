"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, fake embeddings chunk store, service
mocks, temp directories
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import shutil
import tempfile
import uuid
from pathlib import Path
from unittest.mock import AsyncMock

import pytest


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from chatppc.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def fake_embeddings():
    """Deterministic offline embedder."""
    from langchain_core.embeddings import DeterministicFakeEmbedding

    return DeterministicFakeEmbedding(size=8)


@pytest.fixture
def chunk_store(fake_embeddings):
    """ChunkStore backed by fake embeddings, no retry waits."""
    from tenacity import wait_none

    from chatppc.boundary.vdb.chunk_store import ChunkStore

    return ChunkStore(fake_embeddings, max_retries=2, retry_wait=wait_none())


@pytest.fixture
def mock_conversation_service():
    """
    Create mock ConversationService for testing.

    Returns:
        AsyncMock: Mocked ConversationService with async methods
    """
    service = AsyncMock()
    service.append_messages = AsyncMock(return_value=0)
    service.fetch_history = AsyncMock(return_value=[])
    service.list_sessions = AsyncMock(return_value=[])
    service.delete_session = AsyncMock(return_value=None)
    service.delete_all_sessions_for_owner = AsyncMock(return_value=0)
    service.record_link_click = AsyncMock(return_value=None)
    return service


@pytest.fixture
def mock_admin_service():
    """Create mock AdminService for testing."""
    return AsyncMock()


@pytest.fixture
def temp_dir():
    """
    Create a temporary directory for test files.

    Yields:
        Path: Path to temporary directory
    """
    temp_path = Path(tempfile.mkdtemp(prefix="chatppc_test_"))
    yield temp_path

    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def session_id() -> str:
    """Generate a test session ID."""
    return str(uuid.uuid4())
