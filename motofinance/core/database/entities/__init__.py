"""
Database entity models.

This package contains all database entity models organized by business domain.
Importing it registers every table on ``Base.metadata``.

Modules:
- profiles: Staff profiles and sign-in sessions
- riders: Potential and financed riders
- bikes: Motorcycle inventory
- payments: Rider remittances
- expenses: Business expenses and journal entries
- sms: Outgoing SMS log
"""

from .bikes import Bike
from .expenses import BusinessExpense, JournalEntry
from .payments import Payment
from .profiles import AuthSession, Profile
from .riders import FinancedRider, PotentialRider
from .sms import SmsNotification

__all__ = [
    "AuthSession",
    "Bike",
    "BusinessExpense",
    "FinancedRider",
    "JournalEntry",
    "Payment",
    "PotentialRider",
    "Profile",
    "SmsNotification",
]
