"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one session, so a service can touch several tables in a single
transaction.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .bikes import BikeRepository
from .expenses import BusinessExpenseRepository, JournalEntryRepository
from .payments import PaymentRepository
from .profiles import AuthSessionRepository, ProfileRepository
from .riders import FinancedRiderRepository, PotentialRiderRepository
from .sms import SmsNotificationRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    profiles: ProfileRepository
    auth_sessions: AuthSessionRepository
    potential_riders: PotentialRiderRepository
    financed_riders: FinancedRiderRepository
    bikes: BikeRepository
    payments: PaymentRepository
    expenses: BusinessExpenseRepository
    journal_entries: JournalEntryRepository
    sms: SmsNotificationRepository


def build_sql_repos_from_session(*, session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        profiles=ProfileRepository(session),
        auth_sessions=AuthSessionRepository(session),
        potential_riders=PotentialRiderRepository(session),
        financed_riders=FinancedRiderRepository(session),
        bikes=BikeRepository(session),
        payments=PaymentRepository(session),
        expenses=BusinessExpenseRepository(session),
        journal_entries=JournalEntryRepository(session),
        sms=SmsNotificationRepository(session),
    )
