"""
SMS Dispatch.

Every message is first stored as ``pending``, then handed to the gateway
once. The row ends up ``sent`` (with ``sent_at``) or ``failed`` (with the
gateway's error message).
"""

from __future__ import annotations

from typing import Optional

from motofinance.core.database.base import utc_now
from motofinance.core.database.entities import SmsNotification
from motofinance.core.database.repositories import SqlRepoBundle
from motofinance.core.errors import NotFoundError, SmsGatewayError
from motofinance.core.logging_config import get_logger
from motofinance.core.models.domain import SmsStatus
from motofinance.core.models.io.sms import SmsStats
from motofinance.core.monitoring import log_sms_dispatch

from .gateway import SmsGateway

logger = get_logger(__name__)


async def send_sms(
    repos: SqlRepoBundle,
    gateway: SmsGateway,
    recipient_phone: str,
    message: str,
    message_type: str,
    rider_id: Optional[str] = None,
) -> SmsNotification:
    """
    Record and deliver one SMS.

    A gateway failure does not raise: it is stored on the notification.

    Raises:
        NotFoundError: If ``rider_id`` does not refer to a financed rider.
    """
    if rider_id is not None and await repos.financed_riders.get_by_id(rider_id) is None:
        raise NotFoundError("Financed rider", rider_id)

    notification = await repos.sms.create(
        SmsNotification(
            rider_id=rider_id,
            recipient_phone=recipient_phone,
            message=message,
            message_type=message_type,
            status=SmsStatus.pending.value,
        )
    )

    try:
        await gateway.send(recipient_phone, message)
    except SmsGatewayError as e:
        logger.warning(f"SMS {notification.id} ({message_type}) failed: {e}")
        notification.status = SmsStatus.failed.value
        notification.error_message = str(e)[:500]
    else:
        notification.status = SmsStatus.sent.value
        notification.sent_at = utc_now()

    notification = await repos.sms.update(notification)
    log_sms_dispatch(message_type, notification.status, recipient_phone)
    return notification


async def sms_stats(repos: SqlRepoBundle) -> SmsStats:
    counts = await repos.sms.count_by_status()
    total = sum(counts.values())
    sent = counts.get(SmsStatus.sent.value, 0)
    return SmsStats(
        total=total,
        sent=sent,
        pending=counts.get(SmsStatus.pending.value, 0),
        failed=counts.get(SmsStatus.failed.value, 0),
        delivery_rate=(sent / total * 100) if total else 0.0,
    )
