"""
Report I/O models: yearly financial summary, monthly breakdown and dashboard counters.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class FinancialSummary(BaseModel):
    """Yearly totals shown at the top of the reports page."""

    year: int
    total_revenue: float = Field(description="Completed payments dated in the year")
    total_expenses: float
    net_profit: float
    profit_margin: float
    riders_financed: int = Field(description="Financed riders created in the year")
    active_bikes: int = Field(description="Bikes currently financed")
    average_daily_collection: float = Field(description="Revenue divided by the days in the year")
    revenue_growth: float = Field(description="Revenue change against the previous year, 0 without history")


class MonthlyBreakdown(BaseModel):
    month: int = Field(ge=1, le=12)
    month_name: str
    revenue: float
    expenses: float
    profit: float
    riders_financed: int
    margin: float


class ReportHighlights(BaseModel):
    best_month: Optional[str] = Field(default=None, description="Month with the highest profit")
    peak_revenue_month: Optional[str] = None
    most_riders_financed: int = 0


class YearlyReport(BaseModel):
    summary: FinancialSummary
    months: list[MonthlyBreakdown]
    highlights: ReportHighlights


class DashboardStats(BaseModel):
    """Counters on the landing page."""

    potential_riders: int
    financed_riders: int
    total_bikes: int
    total_revenue: float = Field(description="Sum of every recorded payment regardless of status")
    active_riders: int
    overdue_riders: int = Field(description="Financed riders whose last completed payment is overdue")
