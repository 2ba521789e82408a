"""
Payment Service.

Recording payments and computing how far each financed rider is through
repaying their bike. Only ``completed`` payments count.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from motofinance.core.database.base import utc_now
from motofinance.core.database.entities import Payment
from motofinance.core.database.repositories import SqlRepoBundle
from motofinance.core.errors import NotFoundError
from motofinance.core.logging_config import get_logger
from motofinance.core.models.domain import RiderStatus
from motofinance.core.models.io.payments import PaymentCreate, PaymentProgress

logger = get_logger(__name__)


async def record_payment(repos: SqlRepoBundle, payload: PaymentCreate, created_by: Optional[str] = None) -> Payment:
    """
    Store a payment for an existing financed rider.

    Raises:
        NotFoundError: If the rider does not exist.
    """
    if await repos.financed_riders.get_by_id(payload.rider_id) is None:
        raise NotFoundError("Financed rider", payload.rider_id)
    payment = await repos.payments.create(Payment(**payload.model_dump(), created_by=created_by))
    logger.info(f"Recorded payment {payment.id} of {payment.amount} for rider {payment.rider_id}")
    return payment


def progress_percentage(total_paid: float, total_investment: float) -> float:
    if total_investment <= 0:
        return 0.0
    return min(total_paid / total_investment * 100, 100.0)


async def payment_progress(
    repos: SqlRepoBundle, search: Optional[str] = None, today: Optional[date] = None
) -> List[PaymentProgress]:
    """
    Repayment progress of every financed rider, newest rider first.

    ``days_elapsed`` is the number of whole days since the start date and is
    never negative.
    """
    today = today or utc_now().date()
    totals = await repos.payments.completed_totals_by_rider()
    riders = await repos.financed_riders.search_with_bikes(status=RiderStatus.financed.value, search=search)

    progress = []
    for rider, _ in riders:
        total_paid, last_payment_date = totals.get(rider.id, (0.0, None))
        progress.append(
            PaymentProgress(
                rider_id=rider.id,
                full_name=rider.full_name,
                id_number=rider.id_number,
                primary_phone=rider.primary_phone,
                start_date=rider.start_date,
                daily_remittance=rider.daily_remittance,
                total_investment=rider.total_investment,
                total_paid=total_paid,
                progress_percentage=progress_percentage(total_paid, rider.total_investment),
                days_elapsed=max((today - rider.start_date).days, 0),
                expected_days=rider.expected_operation_days,
                last_payment_date=last_payment_date,
            )
        )
    return progress
