"""
Payment Endpoints.

Recording rider remittances and showing repayment progress.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from motofinance.core.database.entities import FinancedRider, Payment
from motofinance.core.models.io.payments import (
    PaymentCreate,
    PaymentProgress,
    PaymentRead,
    PaymentRiderSummary,
    PaymentUpdate,
)
from motofinance.server.services import payments as payment_service
from motofinance.server.services.deps import CurrentUserDep, RepoDep

router = APIRouter()


def _to_read(payment: Payment, rider: Optional[FinancedRider]) -> PaymentRead:
    return PaymentRead(
        **payment.model_dump(),
        rider=PaymentRiderSummary.model_validate(rider) if rider else None,
    )


@router.get(
    "",
    response_model=list[PaymentRead],
    summary="List Payments",
    description=(
        "List payments by payment date, newest first, with the paying rider. "
        "Search matches the rider's ID number or name, or the transaction reference."
    ),
)
async def list_payments(
    repos: RepoDep,
    _: CurrentUserDep,
    search: Optional[str] = Query(default=None),
    rider_id: Optional[str] = Query(default=None, description="Only this rider's payments"),
) -> list[PaymentRead]:
    rows = await repos.payments.search_with_riders(search=search, rider_id=rider_id)
    return [_to_read(payment, rider) for payment, rider in rows]


@router.get(
    "/progress",
    response_model=list[PaymentProgress],
    summary="Payment Progress",
    description="Repayment progress of every financed rider. Search matches ID number or name.",
)
async def get_payment_progress(
    repos: RepoDep,
    _: CurrentUserDep,
    search: Optional[str] = Query(default=None),
) -> list[PaymentProgress]:
    """
    Repayment progress per financed rider.

    - **total_paid**: Sum of completed payments.
    - **progress_percentage**: total_paid / total_investment * 100, capped at 100.
    - **days_elapsed**: Whole days since the start date.
    - **last_payment_date**: Date of the most recent completed payment.
    """
    return await payment_service.payment_progress(repos, search=search)


@router.get(
    "/{payment_id}",
    response_model=PaymentRead,
    summary="Get Payment",
    responses={404: {"description": "Payment not found"}},
)
async def get_payment(payment_id: str, repos: RepoDep, _: CurrentUserDep) -> PaymentRead:
    row = await repos.payments.get_with_rider(payment_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Payment '{payment_id}' not found")
    return _to_read(*row)


@router.post(
    "",
    response_model=PaymentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Payment",
    description="Record a payment for a financed rider. Payments are 'completed' unless stated otherwise.",
    responses={
        201: {"description": "Payment recorded"},
        404: {"description": "Financed rider not found"},
        422: {"description": "Invalid form data"},
    },
)
async def record_payment(payload: PaymentCreate, repos: RepoDep, user: CurrentUserDep) -> PaymentRead:
    payment = await payment_service.record_payment(repos, payload, created_by=user.id)
    rider = await repos.financed_riders.get_by_id(payment.rider_id)
    return _to_read(payment, rider)


@router.patch(
    "/{payment_id}",
    response_model=PaymentRead,
    summary="Update Payment",
    description="Change a payment's status or notes.",
    responses={404: {"description": "Payment not found"}},
)
async def update_payment(payment_id: str, payload: PaymentUpdate, repos: RepoDep, _: CurrentUserDep) -> PaymentRead:
    payment = await repos.payments.get_by_id(payment_id)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Payment '{payment_id}' not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(payment, key, value)
    payment = await repos.payments.update(payment)
    rider = await repos.financed_riders.get_by_id(payment.rider_id)
    return _to_read(payment, rider)
