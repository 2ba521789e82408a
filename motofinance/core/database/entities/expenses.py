"""
Business expense and journal entry entities.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field

from ..base import AwareDateTime, Base, new_id, utc_now


class BusinessExpenseBase(Base):
    """Base fields for a business expense."""

    category: str = Field(max_length=20, index=True)
    description: str = Field(max_length=200)
    amount: float
    expense_date: date = Field(index=True)
    reference_no: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = Field(default=None, max_length=500)


class BusinessExpense(BusinessExpenseBase, table=True):
    """Entity for money spent running the business.

    Table: business_expenses
    """

    __tablename__ = "business_expenses"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    created_by: str = Field(foreign_key="profiles.id", max_length=36)

    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"BusinessExpense(id={self.id}, category={self.category}, amount={self.amount})"


class JournalEntryBase(Base):
    """Base fields for a journal entry."""

    transaction_type: str = Field(max_length=30, index=True)
    amount: float
    transaction_date: date = Field(index=True)
    description: str = Field(max_length=200)
    from_account: Optional[str] = Field(default=None, max_length=100)
    to_account: Optional[str] = Field(default=None, max_length=100)
    reference_no: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = Field(default=None, max_length=500)


class JournalEntry(JournalEntryBase, table=True):
    """Entity for a money movement between accounts.

    Table: journal_entries
    """

    __tablename__ = "journal_entries"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    created_by: str = Field(foreign_key="profiles.id", max_length=36)

    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"JournalEntry(id={self.id}, type={self.transaction_type}, amount={self.amount})"
