"""
SMS Automation.

The automation run is triggered on demand (the SMS page calls it when it
loads); there is no scheduler. Each rule looks for riders that need a
message and skips riders that were already messaged within the rule's
window, so running it several times a day is safe:

- payment_confirmation: completed payments dated today; once per rider per day.
- payment_reminder: last completed payment older than the reminder threshold
  (or none at all); once per rider per day.
- late_payment_warning: no completed payment for the late-warning threshold;
  once per rider per day.
- repossession_notice: no completed payment for the repossession threshold;
  once per rider.
- ownership_congratulations: payment period ended exactly today; once per rider.

"Today" is the current UTC date unless a date is passed in.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Optional, Set

from motofinance.core.database.base import utc_now
from motofinance.core.database.entities import FinancedRider, SmsNotification
from motofinance.core.database.repositories import SqlRepoBundle
from motofinance.core.logging_config import get_logger
from motofinance.core.models.domain import RiderStatus, SmsMessageType, SmsStatus
from motofinance.core.models.io.sms import AutomationRequest, AutomationResult
from motofinance.server.core.config import AutomationConfig, settings

from . import messages
from .dispatch import send_sms
from .gateway import SmsGateway

logger = get_logger(__name__)


class _AutomationRun:
    """State shared by the rules of one automation run."""

    def __init__(
        self,
        repos: SqlRepoBundle,
        gateway: SmsGateway,
        today: date,
        config: AutomationConfig,
        business_name: str,
    ) -> None:
        self.repos = repos
        self.gateway = gateway
        self.today = today
        self.start_of_day = datetime.combine(today, time.min, tzinfo=timezone.utc)
        self.config = config
        self.business_name = business_name
        self.result = AutomationResult()
        self._last_payment: Optional[Dict[str, Optional[date]]] = None

    async def last_payment_dates(self) -> Dict[str, Optional[date]]:
        if self._last_payment is None:
            totals = await self.repos.payments.completed_totals_by_rider()
            self._last_payment = {rider_id: last for rider_id, (_, last) in totals.items()}
        return self._last_payment

    async def days_without_payment(self, rider: FinancedRider) -> int:
        """Days since the last completed payment, or since the start date when the rider never paid."""
        last = (await self.last_payment_dates()).get(rider.id)
        return (self.today - (last or rider.start_date)).days

    async def already_sent(self, message_type: SmsMessageType, today_only: bool) -> Set[str]:
        since = self.start_of_day if today_only else None
        return await self.repos.sms.rider_ids_with_type(message_type.value, since=since)

    async def send(self, rider_id: str, phone: str, message: str, message_type: SmsMessageType) -> None:
        notification: SmsNotification = await send_sms(
            self.repos,
            self.gateway,
            recipient_phone=phone,
            message=message,
            message_type=message_type.value,
            rider_id=rider_id,
        )
        setattr(self.result, message_type.value, getattr(self.result, message_type.value) + 1)
        if notification.status == SmsStatus.failed.value:
            self.result.failed += 1

    async def payment_confirmations(self) -> None:
        sent = await self.already_sent(SmsMessageType.payment_confirmation, today_only=True)
        for payment in await self.repos.payments.completed_on(self.today):
            if payment.rider_id in sent:
                continue
            rider = await self.repos.financed_riders.get_by_id(payment.rider_id)
            if rider is None:
                continue
            await self.send(
                rider.id,
                rider.primary_phone,
                messages.payment_confirmation(rider.full_name, payment.amount, self.business_name),
                SmsMessageType.payment_confirmation,
            )
            sent.add(rider.id)

    async def payment_reminders(self, riders: list[FinancedRider]) -> None:
        threshold = self.today - timedelta(days=self.config.reminder_after_days)
        sent = await self.already_sent(SmsMessageType.payment_reminder, today_only=True)
        last_payment = await self.last_payment_dates()
        for rider in riders:
            last = last_payment.get(rider.id)
            if rider.id in sent or (last is not None and last >= threshold):
                continue
            await self.send(
                rider.id,
                rider.primary_phone,
                messages.payment_reminder(rider.full_name, rider.daily_remittance, self.business_name),
                SmsMessageType.payment_reminder,
            )

    async def late_payment_warnings(self, riders: list[FinancedRider]) -> None:
        sent = await self.already_sent(SmsMessageType.late_payment_warning, today_only=True)
        for rider in riders:
            days = await self.days_without_payment(rider)
            if rider.id in sent or days < self.config.late_warning_after_days:
                continue
            await self.send(
                rider.id,
                rider.primary_phone,
                messages.late_payment_warning(rider.full_name, days, self.business_name),
                SmsMessageType.late_payment_warning,
            )

    async def repossession_notices(self, riders: list[FinancedRider]) -> None:
        sent = await self.already_sent(SmsMessageType.repossession_notice, today_only=False)
        for rider in riders:
            days = await self.days_without_payment(rider)
            if rider.id in sent or days < self.config.repossession_notice_after_days:
                continue
            await self.send(
                rider.id,
                rider.primary_phone,
                messages.repossession_notice(rider.full_name, days, self.business_name),
                SmsMessageType.repossession_notice,
            )

    async def ownership_congratulations(self, riders: list[FinancedRider]) -> None:
        period = self.config.ownership_after_days
        target = self.today - timedelta(days=period)
        sent = await self.already_sent(SmsMessageType.ownership_congratulations, today_only=False)
        for rider in riders:
            if rider.id in sent or rider.start_date != target:
                continue
            await self.send(
                rider.id,
                rider.primary_phone,
                messages.ownership_congratulations(rider.full_name, period, self.business_name),
                SmsMessageType.ownership_congratulations,
            )


async def run_automation(
    repos: SqlRepoBundle,
    gateway: SmsGateway,
    rules: Optional[AutomationRequest] = None,
    today: Optional[date] = None,
    config: Optional[AutomationConfig] = None,
    business_name: Optional[str] = None,
) -> AutomationResult:
    """
    Run the enabled automation rules once and report how many messages each produced.

    Args:
        repos: Repositories bound to the request session
        gateway: Gateway used for every message of the run
        rules: Rule toggles; all rules run when omitted
        today: Date the run is evaluated for, defaults to the current UTC date
        config: Thresholds, defaults to the configured ones
        business_name: Signature appended to messages, defaults to the configured one

    Returns:
        Count of messages per rule and of failed deliveries
    """
    rules = rules or AutomationRequest()
    run = _AutomationRun(
        repos,
        gateway,
        today=today or utc_now().date(),
        config=config or settings.automation,
        business_name=business_name or settings.business_name,
    )
    riders = await repos.financed_riders.list_by_status(RiderStatus.financed.value)

    if rules.payment_confirmation:
        await run.payment_confirmations()
    if rules.payment_reminder:
        await run.payment_reminders(riders)
    if rules.late_payment_warning:
        await run.late_payment_warnings(riders)
    if rules.repossession_notice:
        await run.repossession_notices(riders)
    if rules.ownership_congratulations:
        await run.ownership_congratulations(riders)

    logger.info(
        f"SMS automation for {run.today}: {run.result.total} messages queued, {run.result.failed} failed",
        extra=run.result.model_dump(),
    )
    return run.result
