"""
Centralized database layer for MotoFinance.

Structure:
- entities/: SQLModel table models, one module per business area
- repositories/: Data access layer built on async SQLAlchemy sessions
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session factory, create_all)
"""

from .base import AwareDateTime, Base, as_utc, new_id, utc_now
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "AwareDateTime",
    "Base",
    "as_utc",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
    "new_id",
    "utc_now",
]
