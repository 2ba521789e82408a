"""
SMS notification repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Set

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.sms import SmsNotification
from .base import QueryBuilder, SQLModelRepository


class SmsNotificationRepository(SQLModelRepository[SmsNotification]):
    """Repository for the outgoing SMS log."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SmsNotification)

    async def latest(self, limit: int = 100, search: Optional[str] = None) -> List[SmsNotification]:
        stmt = select(SmsNotification)
        stmt = QueryBuilder.apply_search(
            stmt,
            [SmsNotification.recipient_phone, SmsNotification.message, SmsNotification.message_type],
            search,
        )
        stmt = stmt.order_by(SmsNotification.created_at.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, None)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(self) -> Dict[str, int]:
        stmt = select(SmsNotification.status, func.count()).group_by(SmsNotification.status)
        result = await self.session.execute(stmt)
        return {status: int(count) for status, count in result.all()}

    async def rider_ids_with_type(self, message_type: str, since: Optional[datetime] = None) -> Set[str]:
        """Riders that already have a message of ``message_type``, created at or after ``since`` if given."""
        stmt = select(SmsNotification.rider_id).where(
            SmsNotification.message_type == message_type,
            SmsNotification.rider_id.is_not(None),
        )
        if since is not None:
            stmt = stmt.where(SmsNotification.created_at >= since)
        result = await self.session.execute(stmt.distinct())
        return {rider_id for rider_id in result.scalars().all()}
