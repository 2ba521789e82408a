"""
Journal Entry Endpoints.

A plain ledger of money movements (remittances, expenses, transfers and
repossessions) between accounts.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from motofinance.core.database.entities import JournalEntry
from motofinance.core.models.domain import TransactionType
from motofinance.core.models.io.expenses import JournalEntryCreate, JournalEntryRead
from motofinance.server.services.deps import CurrentUserDep, FinanceUserDep, RepoDep

router = APIRouter()


@router.get(
    "",
    response_model=list[JournalEntryRead],
    summary="List Journal Entries",
    description="List entries, newest transaction date first, optionally by type and date range (inclusive).",
)
async def list_journal_entries(
    repos: RepoDep,
    _: CurrentUserDep,
    transaction_type: Optional[TransactionType] = Query(default=None),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
) -> list[JournalEntryRead]:
    entries = await repos.journal_entries.search(
        transaction_type=transaction_type.value if transaction_type else None,
        start=start_date,
        end=end_date,
    )
    return [JournalEntryRead.model_validate(entry) for entry in entries]


@router.get(
    "/{entry_id}",
    response_model=JournalEntryRead,
    summary="Get Journal Entry",
    responses={404: {"description": "Journal entry not found"}},
)
async def get_journal_entry(entry_id: str, repos: RepoDep, _: CurrentUserDep) -> JournalEntryRead:
    entry = await repos.journal_entries.get_by_id(entry_id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Journal entry '{entry_id}' not found")
    return JournalEntryRead.model_validate(entry)


@router.post(
    "",
    response_model=JournalEntryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Journal Entry",
    description="Record a money movement. Admins and accountants only.",
    responses={403: {"description": "Caller may not manage finances"}},
)
async def create_journal_entry(payload: JournalEntryCreate, repos: RepoDep, user: FinanceUserDep) -> JournalEntryRead:
    entry = await repos.journal_entries.create(JournalEntry(**payload.model_dump(), created_by=user.id))
    return JournalEntryRead.model_validate(entry)
