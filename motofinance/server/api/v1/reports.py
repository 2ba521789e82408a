"""
Report Endpoints.

The yearly financial report and the dashboard counters.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from motofinance.core.database.base import utc_now
from motofinance.core.models.io.reports import DashboardStats, YearlyReport
from motofinance.server.services import reports
from motofinance.server.services.deps import CurrentUserDep, RepoDep

router = APIRouter()


@router.get(
    "/yearly",
    response_model=YearlyReport,
    summary="Yearly Financial Report",
    description=(
        "Revenue, expenses, net profit, riders financed, active bikes, average daily collection and "
        "growth for a year, with a month by month breakdown and highlights."
    ),
)
async def yearly_report(
    repos: RepoDep,
    _: CurrentUserDep,
    year: Optional[int] = Query(default=None, ge=2000, le=2100, description="Defaults to the current year"),
) -> YearlyReport:
    return await reports.yearly_report(repos, year or utc_now().year)


@router.get(
    "/dashboard",
    response_model=DashboardStats,
    summary="Dashboard Statistics",
    description="Counts of prospects, financed riders, bikes, active and overdue riders, and total revenue.",
)
async def dashboard(repos: RepoDep, _: CurrentUserDep) -> DashboardStats:
    return await reports.dashboard_stats(repos)
