"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

import os
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from motofinance.core.logging_config import get_logger
from motofinance.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

logger = get_logger(__name__)

# Create global engine and session factory
engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the database.

    Alembic migrations own the schema in production. For local development
    against SQLite, or when ``DB_CREATE_ALL`` is set, the tables are created
    straight from the entity metadata.
    """
    create_tables = os.getenv("DB_CREATE_ALL", "false").lower() in ("true", "1", "yes")
    if create_tables or engine.dialect.name == "sqlite":
        logger.info(f"Creating database tables on {engine.dialect.name}")
        await create_all(engine)
