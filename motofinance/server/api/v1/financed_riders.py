"""
Financed Rider Endpoints.

Converting prospects into financed riders, maintaining their financing
terms and closing their agreements. Riders are returned together with the
bike they hold.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from motofinance.core.database.entities import Bike, FinancedRider
from motofinance.core.logging_config import get_logger
from motofinance.core.models.domain import RiderStatus
from motofinance.core.models.io.riders import (
    FinancedRiderCreate,
    FinancedRiderRead,
    FinancedRiderUpdate,
    RiderBikeSummary,
    RiderStatusChange,
)
from motofinance.server.services import financing
from motofinance.server.services.deps import CurrentUserDep, RepoDep

logger = get_logger(__name__)

router = APIRouter()


def _to_read(rider: FinancedRider, bike: Optional[Bike]) -> FinancedRiderRead:
    return FinancedRiderRead(
        **rider.model_dump(),
        bike=RiderBikeSummary.model_validate(bike) if bike else None,
    )


@router.get(
    "",
    response_model=list[FinancedRiderRead],
    summary="List Financed Riders",
    description=(
        "List riders with status 'financed' (or the requested status), newest first, "
        "with the bike they hold. Search matches ID number or name."
    ),
)
async def list_financed_riders(
    repos: RepoDep,
    _: CurrentUserDep,
    search: Optional[str] = Query(default=None, description="Matches ID number or full name"),
    rider_status: RiderStatus = Query(default=RiderStatus.financed, alias="status"),
) -> list[FinancedRiderRead]:
    rows = await repos.financed_riders.search_with_bikes(status=rider_status.value, search=search)
    logger.debug(f"Retrieved {len(rows)} financed riders (search={search}, status={rider_status.value})")
    return [_to_read(rider, bike) for rider, bike in rows]


@router.get(
    "/{rider_id}",
    response_model=FinancedRiderRead,
    summary="Get Financed Rider",
    responses={404: {"description": "Financed rider not found"}},
)
async def get_financed_rider(rider_id: str, repos: RepoDep, _: CurrentUserDep) -> FinancedRiderRead:
    row = await repos.financed_riders.get_with_bike(rider_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Financed rider '{rider_id}' not found")
    return _to_read(*row)


@router.post(
    "",
    response_model=FinancedRiderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Finance Rider",
    description=(
        "Create a financed rider, either from a potential rider (personal details are copied unless "
        "overridden) or from full personal details, and hand them an available bike."
    ),
    responses={
        201: {"description": "Rider financed; bike and prospect updated"},
        404: {"description": "Potential rider or bike not found"},
        422: {"description": "Invalid form data, bike not available or prospect already financed"},
    },
)
async def finance_rider(payload: FinancedRiderCreate, repos: RepoDep, user: CurrentUserDep) -> FinancedRiderRead:
    """
    Convert a prospect into a financed rider.

    Effects: the rider is stored as 'financed', the bike becomes 'financed' with
    this rider as its current rider, and the prospect is marked 'financed'.
    """
    rider, bike = await financing.convert_to_financed(repos, payload, created_by=user.id)
    return _to_read(rider, bike)


@router.patch(
    "/{rider_id}",
    response_model=FinancedRiderRead,
    summary="Update Financed Rider",
    description="Partially update contact details and financing terms.",
    responses={404: {"description": "Financed rider not found"}},
)
async def update_financed_rider(
    rider_id: str, payload: FinancedRiderUpdate, repos: RepoDep, _: CurrentUserDep
) -> FinancedRiderRead:
    rider = await financing.update_financed_rider(repos, rider_id, payload)
    bike = await repos.bikes.get_by_id(rider.bike_id) if rider.bike_id else None
    return _to_read(rider, bike)


@router.post(
    "/{rider_id}/status",
    response_model=FinancedRiderRead,
    summary="Change Rider Status",
    description=(
        "Close a financing agreement: 'completed' marks the bike sold, 'repossessed' marks it "
        "repossessed and frees it, 'defaulted' leaves the bike as is."
    ),
    responses={
        404: {"description": "Financed rider not found"},
        422: {"description": "Invalid status or agreement already closed"},
    },
)
async def change_rider_status(
    rider_id: str, payload: RiderStatusChange, repos: RepoDep, _: CurrentUserDep
) -> FinancedRiderRead:
    rider = await financing.change_rider_status(repos, rider_id, payload.status)
    bike = await repos.bikes.get_by_id(rider.bike_id) if rider.bike_id else None
    return _to_read(rider, bike)
