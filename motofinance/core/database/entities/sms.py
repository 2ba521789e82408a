"""
SMS notification log entity.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from motofinance.core.models.domain import SmsStatus

from ..base import AwareDateTime, Base, new_id, utc_now


class SmsNotificationBase(Base):
    """Base fields for an SMS notification."""

    rider_id: Optional[str] = Field(default=None, foreign_key="financed_riders.id", max_length=36, index=True)
    recipient_phone: str = Field(max_length=20)
    message: str = Field(max_length=500)
    message_type: str = Field(max_length=40, index=True)
    status: str = Field(default=SmsStatus.pending.value, max_length=20, index=True)
    sent_at: Optional[datetime] = Field(default=None, sa_type=AwareDateTime)
    error_message: Optional[str] = Field(default=None, max_length=500)


class SmsNotification(SmsNotificationBase, table=True):
    """Entity for one outgoing SMS and its delivery outcome.

    Rows are written as ``pending`` before the gateway is called and moved to
    ``sent`` or ``failed`` afterwards.

    Table: sms_notifications
    """

    __tablename__ = "sms_notifications"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)

    def __repr__(self) -> str:
        return f"SmsNotification(id={self.id}, type={self.message_type}, status={self.status})"
