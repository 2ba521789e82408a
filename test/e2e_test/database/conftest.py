"""Test configuration for database e2e tests.

Starts a throwaway PostgreSQL with testcontainers. The whole package is
skipped unless ``DATABASE__ENABLE_POSTGRES_TESTS`` is switched on in
``test/.env``.
"""

from __future__ import annotations

from test.settings import test_settings
from typing import AsyncGenerator, Generator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from motofinance.core.database import Base, create_all, create_engine, create_sessionmaker
from motofinance.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session


def pytest_collection_modifyitems(config, items):
    if test_settings.database.enable_postgres_tests:
        return
    skip = pytest.mark.skip(reason="PostgreSQL tests are disabled (DATABASE__ENABLE_POSTGRES_TESTS=false)")
    for item in items:
        if "e2e_test/database" in item.nodeid:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def database_url() -> Generator[str, None, None]:
    """Start PostgreSQL and hand out its connection URL."""
    from testcontainers.postgres import PostgresContainer

    postgres_config = test_settings.database.postgres
    container = PostgresContainer(
        postgres_config.image,
        username=postgres_config.user,
        password=postgres_config.password,
        dbname=postgres_config.db,
        driver="asyncpg",
    )
    container.start()
    try:
        yield container.get_connection_url()
    finally:
        container.stop()


@pytest.fixture
async def pg_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_engine(database_url)
    await create_all(engine)
    try:
        yield engine
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.fixture
async def pg_session(pg_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(pg_engine)() as session:
        yield session


@pytest.fixture
def pg_repos(pg_session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=pg_session)
