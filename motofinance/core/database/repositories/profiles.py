"""
Profile and sign-in session repositories.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.profiles import AuthSession, Profile
from .base import SQLModelRepository


class ProfileRepository(SQLModelRepository[Profile]):
    """Repository for staff profiles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Profile)

    async def get_by_email(self, email: str) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Profile))
        return int(result.scalar_one())

    async def list_all(self) -> List[Profile]:
        stmt = select(Profile).order_by(Profile.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class AuthSessionRepository(SQLModelRepository[AuthSession]):
    """Repository for issued bearer tokens."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AuthSession)

    async def get_by_token(self, token: str) -> Optional[AuthSession]:
        stmt = select(AuthSession).where(AuthSession.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def revoke(self, auth_session: AuthSession, now: datetime) -> AuthSession:
        auth_session.revoked_at = now
        self.session.add(auth_session)
        await self.session.commit()
        await self.session.refresh(auth_session)
        return auth_session
