"""
Potential and financed rider repositories.

Financed riders are listed together with the bike they hold, using an
outer join on ``financed_riders.bike_id``.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.bikes import Bike
from ..entities.riders import FinancedRider, PotentialRider
from .base import QueryBuilder, SQLModelRepository


class PotentialRiderRepository(SQLModelRepository[PotentialRider]):
    """Repository for financing prospects."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PotentialRider)

    async def search(self, search: Optional[str] = None, status: Optional[str] = None) -> List[PotentialRider]:
        """Newest first, optionally filtered by status and by name / id number."""
        stmt = select(PotentialRider)
        stmt = QueryBuilder.apply_filters(stmt, PotentialRider, {"status": status})
        stmt = QueryBuilder.apply_search(stmt, [PotentialRider.full_name, PotentialRider.id_number], search)
        stmt = stmt.order_by(PotentialRider.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(PotentialRider))
        return int(result.scalar_one())


class FinancedRiderRepository(SQLModelRepository[FinancedRider]):
    """Repository for financed riders."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, FinancedRider)

    async def search_with_bikes(
        self, status: Optional[str] = None, search: Optional[str] = None
    ) -> List[Tuple[FinancedRider, Optional[Bike]]]:
        """Riders newest first, each paired with the bike they hold (if any)."""
        stmt = select(FinancedRider, Bike).join(Bike, FinancedRider.bike_id == Bike.id, isouter=True)
        stmt = QueryBuilder.apply_filters(stmt, FinancedRider, {"status": status})
        stmt = QueryBuilder.apply_search(stmt, [FinancedRider.id_number, FinancedRider.full_name], search)
        stmt = stmt.order_by(FinancedRider.created_at.desc())
        result = await self.session.execute(stmt)
        return [(rider, bike) for rider, bike in result.all()]

    async def get_with_bike(self, rider_id: str) -> Optional[Tuple[FinancedRider, Optional[Bike]]]:
        stmt = (
            select(FinancedRider, Bike)
            .join(Bike, FinancedRider.bike_id == Bike.id, isouter=True)
            .where(FinancedRider.id == rider_id)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def list_by_status(self, status: str) -> List[FinancedRider]:
        stmt = select(FinancedRider).where(FinancedRider.status == status).order_by(FinancedRider.full_name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, status: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(FinancedRider)
        if status is not None:
            stmt = stmt.where(FinancedRider.status == status)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list_created_between(self, start: datetime, end: datetime) -> List[FinancedRider]:
        """Riders whose ``created_at`` falls in ``[start, end)``."""
        stmt = select(FinancedRider).where(FinancedRider.created_at >= start, FinancedRider.created_at < end)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
