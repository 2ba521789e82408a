"""
Business expense and journal entry repositories.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.expenses import BusinessExpense, JournalEntry
from .base import QueryBuilder, SQLModelRepository


class BusinessExpenseRepository(SQLModelRepository[BusinessExpense]):
    """Repository for business expenses."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BusinessExpense)

    async def search(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        search: Optional[str] = None,
    ) -> List[BusinessExpense]:
        """Expenses dated in ``[start, end]`` (open ended when omitted), newest first."""
        stmt = select(BusinessExpense)
        if start is not None:
            stmt = stmt.where(BusinessExpense.expense_date >= start)
        if end is not None:
            stmt = stmt.where(BusinessExpense.expense_date <= end)
        stmt = QueryBuilder.apply_search(
            stmt,
            [BusinessExpense.description, BusinessExpense.category, BusinessExpense.reference_no],
            search,
        )
        stmt = stmt.order_by(BusinessExpense.expense_date.desc(), BusinessExpense.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class JournalEntryRepository(SQLModelRepository[JournalEntry]):
    """Repository for journal entries."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, JournalEntry)

    async def search(
        self,
        transaction_type: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[JournalEntry]:
        stmt = select(JournalEntry)
        stmt = QueryBuilder.apply_filters(stmt, JournalEntry, {"transaction_type": transaction_type})
        if start is not None:
            stmt = stmt.where(JournalEntry.transaction_date >= start)
        if end is not None:
            stmt = stmt.where(JournalEntry.transaction_date <= end)
        stmt = stmt.order_by(JournalEntry.transaction_date.desc(), JournalEntry.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
