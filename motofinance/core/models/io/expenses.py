"""
Business expense and journal I/O models, including the profit analysis.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from motofinance.core.models.domain import ExpenseCategory, TransactionType
from motofinance.core.validation import FormModel, OptionalText, PartialUpdate


class ExpensePeriod(str, Enum):
    """Expense list period filter, applied on ``expense_date``."""

    current_year = "current-year"
    current_month = "current-month"
    all = "all"


class ExpenseCreate(FormModel):
    """Schema for recording a business expense."""

    category: ExpenseCategory
    description: str = Field(min_length=5, max_length=200)
    amount: float = Field(gt=0, le=10_000_000)
    expense_date: date
    reference_no: OptionalText = Field(default=None, max_length=50)
    notes: OptionalText = Field(default=None, max_length=500)


class ExpenseUpdate(PartialUpdate):
    clearable = frozenset({"reference_no", "notes"})

    category: Optional[ExpenseCategory] = None
    description: Optional[str] = Field(default=None, min_length=5, max_length=200)
    amount: Optional[float] = Field(default=None, gt=0, le=10_000_000)
    expense_date: Optional[date] = None
    reference_no: OptionalText = Field(default=None, max_length=50)
    notes: OptionalText = Field(default=None, max_length=500)


class ExpenseRead(BaseModel):
    """Schema for reading a business expense."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    category: ExpenseCategory
    description: str
    amount: float
    expense_date: date
    reference_no: Optional[str] = None
    notes: Optional[str] = None
    created_by: str
    created_at: datetime
    updated_at: datetime


class CategoryTotal(BaseModel):
    category: ExpenseCategory
    total: float
    count: int


class ProfitAnalysis(BaseModel):
    """Current year against the previous one."""

    year: int
    total_revenue: float = Field(description="Completed payments dated in the year")
    total_expenses: float
    net_profit: float
    profit_margin: float = Field(description="Net profit as a percentage of revenue, 0 without revenue")
    previous_revenue: float
    previous_expenses: float
    revenue_growth: float = Field(description="Percentage change against the previous year, 0 without history")
    expense_growth: float


# =====================================================================
# Journal entries
# =====================================================================


class JournalEntryCreate(FormModel):
    """Schema for recording a money movement in the journal."""

    transaction_type: TransactionType
    amount: float = Field(gt=0, le=10_000_000)
    transaction_date: date
    description: str = Field(min_length=2, max_length=200)
    from_account: OptionalText = Field(default=None, max_length=100)
    to_account: OptionalText = Field(default=None, max_length=100)
    reference_no: OptionalText = Field(default=None, max_length=50)
    notes: OptionalText = Field(default=None, max_length=500)


class JournalEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    transaction_type: TransactionType
    amount: float
    transaction_date: date
    description: str
    from_account: Optional[str] = None
    to_account: Optional[str] = None
    reference_no: Optional[str] = None
    notes: Optional[str] = None
    created_by: str
    created_at: datetime
    updated_at: datetime
