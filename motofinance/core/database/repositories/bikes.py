"""
Bike inventory repository.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.bikes import Bike
from ..entities.riders import FinancedRider
from .base import QueryBuilder, SQLModelRepository


class BikeRepository(SQLModelRepository[Bike]):
    """Repository for motorcycles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Bike)

    async def search_with_riders(
        self, status: Optional[str] = None, search: Optional[str] = None
    ) -> List[Tuple[Bike, Optional[FinancedRider]]]:
        """Bikes newest first, each paired with its current rider (if any)."""
        stmt = select(Bike, FinancedRider).join(
            FinancedRider, Bike.current_rider_id == FinancedRider.id, isouter=True
        )
        stmt = QueryBuilder.apply_filters(stmt, Bike, {"status": status})
        stmt = QueryBuilder.apply_search(stmt, [Bike.registration_no, Bike.make, Bike.chassis_no], search)
        stmt = stmt.order_by(Bike.created_at.desc())
        result = await self.session.execute(stmt)
        return [(bike, rider) for bike, rider in result.all()]

    async def count(self, status: Optional[str] = None) -> int:
        stmt = select(func.count()).select_from(Bike)
        if status is not None:
            stmt = stmt.where(Bike.status == status)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
