"""
Tests for schema creation and teardown helpers.

Dependencies: pytest, sqlalchemy, aiosqlite
System role: Schema bootstrap verification
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from chatppc.boundary.db import create_tables


@pytest.fixture
async def sqlite_engine(monkeypatch):
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    monkeypatch.setattr(create_tables, "get_async_engine", lambda: engine)
    yield engine
    await engine.dispose()


async def _table_names(engine) -> set[str]:
    async with engine.connect() as conn:
        return set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))


class TestCreateTables:
    """Test create_all_tables and drop_all_tables."""

    async def test_create_all_tables(self, sqlite_engine, capsys):
        await create_tables.create_all_tables()

        names = await _table_names(sqlite_engine)
        assert {"chat_sessions", "chat_messages", "link_clicks", "documents"} <= names
        assert "created successfully" in capsys.readouterr().out

    async def test_create_is_idempotent(self, sqlite_engine):
        await create_tables.create_all_tables()
        await create_tables.create_all_tables()

        assert "documents" in await _table_names(sqlite_engine)

    async def test_drop_all_tables(self, sqlite_engine):
        await create_tables.create_all_tables()
        await create_tables.drop_all_tables()

        assert await _table_names(sqlite_engine) == set()
