"""
SMS Notification Endpoints.

The SMS log, its delivery statistics, manual sending and the automation run
the SMS page triggers when it loads.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Query, status

from motofinance.core.models.io.sms import (
    AutomationRequest,
    AutomationResult,
    SmsNotificationRead,
    SmsSendRequest,
    SmsStats,
)
from motofinance.server.services import sms
from motofinance.server.services.deps import CurrentUserDep, RepoDep, SmsGatewayDep

router = APIRouter()


@router.get(
    "",
    response_model=list[SmsNotificationRead],
    summary="List SMS Notifications",
    description="The latest notifications, newest first. Search matches phone, message text or type.",
)
async def list_notifications(
    repos: RepoDep,
    _: CurrentUserDep,
    search: Optional[str] = Query(default=None),
    limit: int = Query(default=100, ge=1, le=100),
) -> list[SmsNotificationRead]:
    notifications = await repos.sms.latest(limit=limit, search=search)
    return [SmsNotificationRead.model_validate(notification) for notification in notifications]


@router.get(
    "/stats",
    response_model=SmsStats,
    summary="SMS Statistics",
    description="Sent, pending and failed counts, and the share of messages sent.",
)
async def notification_stats(repos: RepoDep, _: CurrentUserDep) -> SmsStats:
    return await sms.sms_stats(repos)


@router.post(
    "",
    response_model=SmsNotificationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send SMS",
    description=(
        "Send one SMS. The message is stored as pending, handed to the gateway once, then marked "
        "sent or failed. A gateway failure is reported in the returned notification."
    ),
    responses={
        201: {"description": "Notification stored with its delivery outcome"},
        404: {"description": "Financed rider not found"},
        422: {"description": "Invalid phone number or message length"},
    },
)
async def send_notification(
    payload: SmsSendRequest, repos: RepoDep, gateway: SmsGatewayDep, _: CurrentUserDep
) -> SmsNotificationRead:
    notification = await sms.send_sms(
        repos,
        gateway,
        recipient_phone=payload.recipient_phone,
        message=payload.message,
        message_type=payload.message_type,
        rider_id=payload.rider_id,
    )
    return SmsNotificationRead.model_validate(notification)


@router.post(
    "/automation",
    response_model=AutomationResult,
    summary="Run SMS Automation",
    description=(
        "Run the automated checks (payment confirmations, reminders, late payment warnings, "
        "repossession notices and ownership congratulations) once. Rules can be switched off in the body."
    ),
)
async def run_automation(
    repos: RepoDep,
    gateway: SmsGatewayDep,
    _: CurrentUserDep,
    rules: Optional[AutomationRequest] = Body(default=None),
) -> AutomationResult:
    return await sms.run_automation(repos, gateway, rules=rules)
