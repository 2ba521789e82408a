"""Test configuration for database unit tests.

Provides an in-memory SQLite engine with the full schema and a session
bound to it.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from motofinance.core.database import create_all, create_engine, create_sessionmaker
from motofinance.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:")
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture
def db_repos(in_memory_session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=in_memory_session)
