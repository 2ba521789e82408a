"""
Payment (remittance) entity.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field

from motofinance.core.models.domain import PaymentMethod, PaymentStatus

from ..base import AwareDateTime, Base, new_id, utc_now


class PaymentBase(Base):
    """Base fields for a payment."""

    rider_id: str = Field(foreign_key="financed_riders.id", max_length=36, index=True)
    amount: float
    payment_date: date = Field(index=True)
    payment_method: str = Field(default=PaymentMethod.mpesa.value, max_length=20)
    status: str = Field(default=PaymentStatus.completed.value, max_length=20, index=True)
    transaction_reference: Optional[str] = Field(default=None, max_length=100, index=True)
    notes: Optional[str] = Field(default=None, max_length=500)


class Payment(PaymentBase, table=True):
    """Entity for a payment made by a financed rider.

    Only ``completed`` payments count towards repayment progress and revenue.

    Table: payments
    """

    __tablename__ = "payments"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    created_by: Optional[str] = Field(default=None, foreign_key="profiles.id", max_length=36)

    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Payment(id={self.id}, rider_id={self.rider_id}, amount={self.amount}, status={self.status})"
