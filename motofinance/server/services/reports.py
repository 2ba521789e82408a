"""
Reports Service.

Profit/loss figures for the expenses page, the yearly report with its
monthly breakdown, and the dashboard counters. Revenue always means
completed payments dated in the period; expenses are dated by
``expense_date`` and riders financed by ``created_at``.
"""

from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional, Tuple

from motofinance.core.database.base import utc_now
from motofinance.core.database.entities import BusinessExpense, Payment
from motofinance.core.database.repositories import SqlRepoBundle
from motofinance.core.logging_config import get_logger
from motofinance.core.models.domain import BikeStatus, RiderStatus
from motofinance.core.models.io.expenses import CategoryTotal, ExpensePeriod, ProfitAnalysis
from motofinance.core.models.io.reports import (
    DashboardStats,
    FinancialSummary,
    MonthlyBreakdown,
    ReportHighlights,
    YearlyReport,
)
from motofinance.server.core.config import settings

logger = get_logger(__name__)


def percent(part: float, whole: float) -> float:
    """``part`` as a percentage of ``whole``; 0 when there is nothing to compare with."""
    if whole <= 0:
        return 0.0
    return part / whole * 100


def growth(current: float, previous: float) -> float:
    return percent(current - previous, previous)


def year_bounds(year: int) -> Tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def period_bounds(period: ExpensePeriod | str, today: date) -> Tuple[Optional[date], Optional[date]]:
    """Inclusive date range covered by an expense list period."""
    period = ExpensePeriod(period)
    if period is ExpensePeriod.current_year:
        return year_bounds(today.year)
    if period is ExpensePeriod.current_month:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return date(today.year, today.month, 1), date(today.year, today.month, last_day)
    return None, None


def category_breakdown(expenses: Iterable[BusinessExpense]) -> List[CategoryTotal]:
    """Total and count per category, largest total first."""
    totals: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for expense in expenses:
        totals[expense.category] += expense.amount
        counts[expense.category] += 1
    return [
        CategoryTotal(category=category, total=total, count=counts[category])
        for category, total in sorted(totals.items(), key=lambda item: item[1], reverse=True)
    ]


def _total(rows: Iterable[Payment | BusinessExpense]) -> float:
    return float(sum(row.amount for row in rows))


async def _revenue_and_expenses(
    repos: SqlRepoBundle, year: int
) -> Tuple[List[Payment], List[BusinessExpense]]:
    start, end = year_bounds(year)
    payments = await repos.payments.completed_between(start, end)
    expenses = await repos.expenses.search(start=start, end=end)
    return payments, expenses


async def profit_analysis(repos: SqlRepoBundle, today: Optional[date] = None) -> ProfitAnalysis:
    """Current year's profit and loss compared with the previous year."""
    year = (today or utc_now().date()).year
    payments, expenses = await _revenue_and_expenses(repos, year)
    prev_payments, prev_expenses = await _revenue_and_expenses(repos, year - 1)

    revenue, spent = _total(payments), _total(expenses)
    prev_revenue, prev_spent = _total(prev_payments), _total(prev_expenses)
    net_profit = revenue - spent
    return ProfitAnalysis(
        year=year,
        total_revenue=revenue,
        total_expenses=spent,
        net_profit=net_profit,
        profit_margin=percent(net_profit, revenue),
        previous_revenue=prev_revenue,
        previous_expenses=prev_spent,
        revenue_growth=growth(revenue, prev_revenue),
        expense_growth=growth(spent, prev_spent),
    )


def _highlights(months: List[MonthlyBreakdown]) -> ReportHighlights:
    # Ties go to the later month.
    best = months[0]
    peak = months[0]
    for month in months[1:]:
        if month.profit >= best.profit:
            best = month
        if month.revenue >= peak.revenue:
            peak = month
    return ReportHighlights(
        best_month=best.month_name,
        peak_revenue_month=peak.month_name,
        most_riders_financed=max(month.riders_financed for month in months),
    )


async def yearly_report(repos: SqlRepoBundle, year: int) -> YearlyReport:
    """
    Financial summary for ``year`` with a breakdown per calendar month.

    The average daily collection divides revenue by the days in the year
    (366 in leap years). Growth compares revenue with the previous year.
    """
    payments, expenses = await _revenue_and_expenses(repos, year)
    prev_payments = await repos.payments.completed_between(*year_bounds(year - 1))
    riders = await repos.financed_riders.list_created_between(
        datetime(year, 1, 1, tzinfo=timezone.utc), datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    )
    active_bikes = await repos.bikes.count(status=BikeStatus.financed.value)

    revenue_by_month: dict[int, float] = defaultdict(float)
    expenses_by_month: dict[int, float] = defaultdict(float)
    riders_by_month: dict[int, int] = defaultdict(int)
    for payment in payments:
        revenue_by_month[payment.payment_date.month] += payment.amount
    for expense in expenses:
        expenses_by_month[expense.expense_date.month] += expense.amount
    for rider in riders:
        riders_by_month[rider.created_at.month] += 1

    months = []
    for month in range(1, 13):
        revenue = revenue_by_month[month]
        profit = revenue - expenses_by_month[month]
        months.append(
            MonthlyBreakdown(
                month=month,
                month_name=calendar.month_name[month],
                revenue=revenue,
                expenses=expenses_by_month[month],
                profit=profit,
                riders_financed=riders_by_month[month],
                margin=percent(profit, revenue),
            )
        )

    total_revenue, total_expenses = _total(payments), _total(expenses)
    net_profit = total_revenue - total_expenses
    days_in_year = 366 if calendar.isleap(year) else 365
    summary = FinancialSummary(
        year=year,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=net_profit,
        profit_margin=percent(net_profit, total_revenue),
        riders_financed=len(riders),
        active_bikes=active_bikes,
        average_daily_collection=total_revenue / days_in_year,
        revenue_growth=growth(total_revenue, _total(prev_payments)),
    )
    logger.debug(f"Built yearly report for {year}: revenue={total_revenue}, expenses={total_expenses}")
    return YearlyReport(summary=summary, months=months, highlights=_highlights(months))


async def dashboard_stats(
    repos: SqlRepoBundle, today: Optional[date] = None, reminder_after_days: Optional[int] = None
) -> DashboardStats:
    """
    Landing page counters.

    A financed rider is overdue when their last completed payment is older
    than the payment reminder threshold, or when they never paid.
    """
    today = today or utc_now().date()
    days = reminder_after_days if reminder_after_days is not None else settings.automation.reminder_after_days
    threshold = today - timedelta(days=days)

    active = await repos.financed_riders.list_by_status(RiderStatus.financed.value)
    totals = await repos.payments.completed_totals_by_rider()
    overdue = 0
    for rider in active:
        last = totals.get(rider.id, (0.0, None))[1]
        if last is None or last < threshold:
            overdue += 1

    return DashboardStats(
        potential_riders=await repos.potential_riders.count(),
        financed_riders=await repos.financed_riders.count(),
        total_bikes=await repos.bikes.count(),
        total_revenue=await repos.payments.total_amount(),
        active_riders=len(active),
        overdue_riders=overdue,
    )
