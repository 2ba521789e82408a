"""
Business Expense Endpoints.

Recording expenses and the profit/loss analysis shown on the expenses page.
Anyone signed in can read; recording and correcting expenses is limited to
admins and accountants.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from motofinance.core.database.base import utc_now
from motofinance.core.database.entities import BusinessExpense
from motofinance.core.logging_config import get_logger
from motofinance.core.models.io.expenses import (
    CategoryTotal,
    ExpenseCreate,
    ExpensePeriod,
    ExpenseRead,
    ExpenseUpdate,
    ProfitAnalysis,
)
from motofinance.server.services import reports
from motofinance.server.services.deps import CurrentUserDep, FinanceUserDep, RepoDep

logger = get_logger(__name__)

router = APIRouter()


async def _expenses_for(repos, period: ExpensePeriod, search: Optional[str]) -> list[BusinessExpense]:
    start, end = reports.period_bounds(period, utc_now().date())
    return await repos.expenses.search(start=start, end=end, search=search)


@router.get(
    "",
    response_model=list[ExpenseRead],
    summary="List Expenses",
    description=(
        "List expenses in the period, newest expense date first. "
        "Search matches description, category or reference number."
    ),
)
async def list_expenses(
    repos: RepoDep,
    _: CurrentUserDep,
    period: ExpensePeriod = Query(default=ExpensePeriod.current_year),
    search: Optional[str] = Query(default=None),
) -> list[ExpenseRead]:
    expenses = await _expenses_for(repos, period, search)
    return [ExpenseRead.model_validate(expense) for expense in expenses]


@router.get(
    "/breakdown",
    response_model=list[CategoryTotal],
    summary="Expense Breakdown",
    description="Total per category of the expenses the list would show for the same filters.",
)
async def expense_breakdown(
    repos: RepoDep,
    _: CurrentUserDep,
    period: ExpensePeriod = Query(default=ExpensePeriod.current_year),
    search: Optional[str] = Query(default=None),
) -> list[CategoryTotal]:
    expenses = await _expenses_for(repos, period, search)
    return reports.category_breakdown(expenses)


@router.get(
    "/profit-analysis",
    response_model=ProfitAnalysis,
    summary="Profit Analysis",
    description="Current year revenue, expenses, net profit and margin, with growth against the previous year.",
)
async def profit_analysis(repos: RepoDep, _: CurrentUserDep) -> ProfitAnalysis:
    return await reports.profit_analysis(repos)


@router.get(
    "/{expense_id}",
    response_model=ExpenseRead,
    summary="Get Expense",
    responses={404: {"description": "Expense not found"}},
)
async def get_expense(expense_id: str, repos: RepoDep, _: CurrentUserDep) -> ExpenseRead:
    expense = await repos.expenses.get_by_id(expense_id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Expense '{expense_id}' not found")
    return ExpenseRead.model_validate(expense)


@router.post(
    "",
    response_model=ExpenseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Expense",
    description="Record a business expense on behalf of the signed-in user. Admins and accountants only.",
    responses={
        201: {"description": "Expense recorded"},
        403: {"description": "Caller may not manage finances"},
        422: {"description": "Invalid form data"},
    },
)
async def record_expense(payload: ExpenseCreate, repos: RepoDep, user: FinanceUserDep) -> ExpenseRead:
    expense = await repos.expenses.create(BusinessExpense(**payload.model_dump(), created_by=user.id))
    logger.info(f"Recorded {expense.category} expense {expense.id} of {expense.amount}")
    return ExpenseRead.model_validate(expense)


@router.patch(
    "/{expense_id}",
    response_model=ExpenseRead,
    summary="Update Expense",
    description="Partially update an expense. Admins and accountants only.",
    responses={
        403: {"description": "Caller may not manage finances"},
        404: {"description": "Expense not found"},
    },
)
async def update_expense(
    expense_id: str, payload: ExpenseUpdate, repos: RepoDep, _: FinanceUserDep
) -> ExpenseRead:
    expense = await repos.expenses.get_by_id(expense_id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Expense '{expense_id}' not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(expense, key, value)
    expense = await repos.expenses.update(expense)
    return ExpenseRead.model_validate(expense)
