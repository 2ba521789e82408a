"""Domain enums for the back-office models."""

from __future__ import annotations

from enum import Enum


class RiderStatus(str, Enum):
    """
    Lifecycle status of a rider.

    Prospects start as ``potential``; converting one sets ``financed``.
    A financed rider ends as ``completed``, ``defaulted`` or ``repossessed``.
    """

    potential = "potential"
    financed = "financed"
    completed = "completed"
    defaulted = "defaulted"
    repossessed = "repossessed"


class PaymentStatus(str, Enum):
    """Status of a recorded payment. Only ``completed`` payments count as revenue."""

    pending = "pending"
    completed = "completed"
    failed = "failed"
    overdue = "overdue"


class TransactionType(str, Enum):
    """Kind of journal entry."""

    daily_remittance = "daily_remittance"
    expense = "expense"
    transfer = "transfer"
    repossession = "repossession"


class UserRole(str, Enum):
    """Staff roles stored on the user profile."""

    admin = "admin"
    accountant = "accountant"
    rider_clerk = "rider_clerk"


class BikeStatus(str, Enum):
    """Inventory status of a motorcycle."""

    available = "available"
    financed = "financed"
    maintenance = "maintenance"
    repossessed = "repossessed"
    sold = "sold"


class PaymentMethod(str, Enum):
    mpesa = "mpesa"
    cash = "cash"
    bank_transfer = "bank_transfer"
    cheque = "cheque"


class ExpenseCategory(str, Enum):
    fuel = "fuel"
    maintenance = "maintenance"
    insurance = "insurance"
    office = "office"
    marketing = "marketing"
    utilities = "utilities"
    staff = "staff"
    other = "other"


class OperationSlot(str, Enum):
    """Named time-of-day shift assigned to a financed rider."""

    morning = "morning"  # 6AM - 2PM
    evening = "evening"  # 2PM - 10PM
    night = "night"  # 10PM - 6AM


class SmsMessageType(str, Enum):
    """Purpose of an SMS notification. The first five are produced by automation."""

    payment_confirmation = "payment_confirmation"
    payment_reminder = "payment_reminder"
    late_payment_warning = "late_payment_warning"
    repossession_notice = "repossession_notice"
    ownership_congratulations = "ownership_congratulations"
    welcome = "welcome"
    warning = "warning"
    general = "general"
    manual = "manual"


class SmsStatus(str, Enum):
    pending = "pending"
    sent = "sent"
    failed = "failed"
