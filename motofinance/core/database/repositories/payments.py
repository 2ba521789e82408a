"""
Payment repository, including the aggregate queries behind progress and reports.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from motofinance.core.models.domain import PaymentStatus

from ..entities.payments import Payment
from ..entities.riders import FinancedRider
from .base import QueryBuilder, SQLModelRepository

COMPLETED = PaymentStatus.completed.value


class PaymentRepository(SQLModelRepository[Payment]):
    """Repository for rider payments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Payment)

    async def search_with_riders(
        self, search: Optional[str] = None, rider_id: Optional[str] = None
    ) -> List[Tuple[Payment, FinancedRider]]:
        """Payments by payment date, newest first, each with the paying rider."""
        stmt = select(Payment, FinancedRider).join(FinancedRider, Payment.rider_id == FinancedRider.id)
        stmt = QueryBuilder.apply_filters(stmt, Payment, {"rider_id": rider_id})
        stmt = QueryBuilder.apply_search(
            stmt,
            [FinancedRider.id_number, FinancedRider.full_name, Payment.transaction_reference],
            search,
        )
        stmt = stmt.order_by(Payment.payment_date.desc(), Payment.created_at.desc())
        result = await self.session.execute(stmt)
        return [(payment, rider) for payment, rider in result.all()]

    async def get_with_rider(self, payment_id: str) -> Optional[Tuple[Payment, FinancedRider]]:
        stmt = (
            select(Payment, FinancedRider)
            .join(FinancedRider, Payment.rider_id == FinancedRider.id)
            .where(Payment.id == payment_id)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def completed_between(self, start: date, end: date) -> List[Payment]:
        """Completed payments dated in ``[start, end]``."""
        stmt = select(Payment).where(
            Payment.status == COMPLETED,
            Payment.payment_date >= start,
            Payment.payment_date <= end,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def completed_on(self, day: date) -> List[Payment]:
        stmt = (
            select(Payment)
            .where(Payment.status == COMPLETED, Payment.payment_date == day)
            .order_by(Payment.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def completed_totals_by_rider(self) -> Dict[str, Tuple[float, Optional[date]]]:
        """Map rider id to (sum of completed payments, latest completed payment date)."""
        stmt = (
            select(Payment.rider_id, func.sum(Payment.amount), func.max(Payment.payment_date))
            .where(Payment.status == COMPLETED)
            .group_by(Payment.rider_id)
        )
        result = await self.session.execute(stmt)
        return {rider_id: (float(total or 0), last_date) for rider_id, total, last_date in result.all()}

    async def total_amount(self) -> float:
        """Sum of every recorded payment, whatever its status."""
        result = await self.session.execute(select(func.coalesce(func.sum(Payment.amount), 0)))
        return float(result.scalar_one())
