"""
Payment I/O models: recorded remittances and per-rider repayment progress.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from motofinance.core.models.domain import PaymentMethod, PaymentStatus
from motofinance.core.validation import FormModel, OptionalText, PartialUpdate


class PaymentCreate(FormModel):
    """Schema for recording a payment against a financed rider."""

    rider_id: str = Field(min_length=1)
    amount: float = Field(gt=0, le=1_000_000)
    payment_date: date
    payment_method: PaymentMethod = PaymentMethod.mpesa
    status: PaymentStatus = PaymentStatus.completed
    transaction_reference: OptionalText = Field(default=None, max_length=100)
    notes: OptionalText = Field(default=None, max_length=500)


class PaymentUpdate(PartialUpdate):
    """Payments are corrected through their status and notes only."""

    clearable = frozenset({"notes"})

    status: Optional[PaymentStatus] = None
    notes: OptionalText = Field(default=None, max_length=500)


class PaymentRiderSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    id_number: str
    primary_phone: str
    total_investment: float
    daily_remittance: float
    start_date: date
    expected_operation_days: int


class PaymentRead(BaseModel):
    """Schema for reading a payment, with the paying rider."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    rider_id: str
    amount: float
    payment_date: date
    payment_method: PaymentMethod
    status: PaymentStatus
    transaction_reference: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    rider: Optional[PaymentRiderSummary] = None


class PaymentProgress(BaseModel):
    """How far a financed rider is through repaying their bike."""

    rider_id: str
    full_name: str
    id_number: str
    primary_phone: str
    start_date: date
    daily_remittance: float
    total_investment: float
    total_paid: float = Field(description="Sum of completed payments")
    progress_percentage: float = Field(description="Share of the investment repaid, capped at 100")
    days_elapsed: int = Field(description="Whole days since the start date")
    expected_days: int
    last_payment_date: Optional[date] = None
