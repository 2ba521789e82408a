"""
Database repository layer using SQLModel.

Each module provides async data access operations for its SQLModel
entities, built on the shared CRUD contract in ``base``.

Modules:
- base: AsyncBaseRepository interface, SQLModelRepository and QueryBuilder
- profiles: Staff profiles and sign-in sessions
- riders: Potential and financed riders
- bikes: Motorcycle inventory
- payments: Rider payments and their aggregates
- expenses: Business expenses and journal entries
- sms: Outgoing SMS log
- bundle: SqlRepoBundle for dependency injection
"""

from .bikes import BikeRepository
from .bundle import SqlRepoBundle, build_sql_repos_from_session
from .expenses import BusinessExpenseRepository, JournalEntryRepository
from .payments import PaymentRepository
from .profiles import AuthSessionRepository, ProfileRepository
from .riders import FinancedRiderRepository, PotentialRiderRepository
from .sms import SmsNotificationRepository

__all__ = [
    "AuthSessionRepository",
    "BikeRepository",
    "BusinessExpenseRepository",
    "FinancedRiderRepository",
    "JournalEntryRepository",
    "PaymentRepository",
    "PotentialRiderRepository",
    "ProfileRepository",
    "SmsNotificationRepository",
    "SqlRepoBundle",
    "build_sql_repos_from_session",
]
