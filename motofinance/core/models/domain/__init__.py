"""Domain-level enums for the back office.

These enumerations mirror the status and category columns stored in the
database. They are shared between:

- the SQLModel entities,
- the API request/response models,
- the services that move riders, bikes and payments between states.
"""

from .enums import (
    BikeStatus,
    ExpenseCategory,
    OperationSlot,
    PaymentMethod,
    PaymentStatus,
    RiderStatus,
    SmsMessageType,
    SmsStatus,
    TransactionType,
    UserRole,
)

__all__ = [
    "BikeStatus",
    "ExpenseCategory",
    "OperationSlot",
    "PaymentMethod",
    "PaymentStatus",
    "RiderStatus",
    "SmsMessageType",
    "SmsStatus",
    "TransactionType",
    "UserRole",
]
