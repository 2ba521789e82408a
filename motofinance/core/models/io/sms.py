"""
SMS notification I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from motofinance.core.models.domain import SmsMessageType, SmsStatus
from motofinance.core.validation import FormModel, KenyanPhone, blank_to_none


class SmsSendRequest(FormModel):
    """Manual SMS form."""

    rider_id: Optional[str] = None
    recipient_phone: KenyanPhone
    message_type: SmsMessageType = SmsMessageType.manual
    message: str = Field(min_length=10, max_length=160, description="A single SMS worth of text")

    @field_validator("rider_id", mode="before")
    @classmethod
    def _blank_rider(cls, value):
        return blank_to_none(value)


class SmsNotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    rider_id: Optional[str] = None
    recipient_phone: str
    message: str
    message_type: SmsMessageType
    status: SmsStatus
    sent_at: Optional[datetime] = None
    error_message: Optional[str] = None
    created_at: datetime


class SmsStats(BaseModel):
    total: int
    sent: int
    pending: int
    failed: int
    delivery_rate: float = Field(description="Sent messages as a percentage of all messages")


class AutomationRequest(BaseModel):
    """Which automation rules to run. Every rule is on unless switched off."""

    payment_confirmation: bool = True
    payment_reminder: bool = True
    late_payment_warning: bool = True
    repossession_notice: bool = True
    ownership_congratulations: bool = True


class AutomationResult(BaseModel):
    """Number of messages queued by each rule, plus gateway failures across all of them."""

    payment_confirmation: int = 0
    payment_reminder: int = 0
    late_payment_warning: int = 0
    repossession_notice: int = 0
    ownership_congratulations: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return (
            self.payment_confirmation
            + self.payment_reminder
            + self.late_payment_warning
            + self.repossession_notice
            + self.ownership_congratulations
        )
