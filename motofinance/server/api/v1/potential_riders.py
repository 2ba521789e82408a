"""
Potential Rider Endpoints.

Registration and maintenance of financing prospects.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from motofinance.core.database.entities import PotentialRider
from motofinance.core.logging_config import get_logger
from motofinance.core.models.domain import RiderStatus
from motofinance.core.models.io.riders import PotentialRiderCreate, PotentialRiderRead, PotentialRiderUpdate
from motofinance.server.services.deps import CurrentUserDep, RepoDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[PotentialRiderRead],
    summary="List Potential Riders",
    description="List prospects, newest first, optionally filtered by status and searched by name or ID number.",
)
async def list_potential_riders(
    repos: RepoDep,
    _: CurrentUserDep,
    search: Optional[str] = Query(default=None, description="Matches full name or ID number"),
    rider_status: Optional[RiderStatus] = Query(default=None, alias="status"),
) -> list[PotentialRiderRead]:
    riders = await repos.potential_riders.search(
        search=search, status=rider_status.value if rider_status else None
    )
    logger.debug(f"Retrieved {len(riders)} potential riders (search={search}, status={rider_status})")
    return [PotentialRiderRead.model_validate(rider) for rider in riders]


@router.get(
    "/{rider_id}",
    response_model=PotentialRiderRead,
    summary="Get Potential Rider",
    responses={404: {"description": "Potential rider not found"}},
)
async def get_potential_rider(rider_id: str, repos: RepoDep, _: CurrentUserDep) -> PotentialRiderRead:
    rider = await repos.potential_riders.get_by_id(rider_id)
    if not rider:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Potential rider '{rider_id}' not found")
    return PotentialRiderRead.model_validate(rider)


@router.post(
    "",
    response_model=PotentialRiderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register Potential Rider",
    description="Register a financing prospect. Optional fields may be sent as empty strings.",
    responses={
        201: {"description": "Prospect registered"},
        409: {"description": "ID number already registered"},
        422: {"description": "Invalid form data"},
    },
)
async def register_potential_rider(
    payload: PotentialRiderCreate, repos: RepoDep, user: CurrentUserDep
) -> PotentialRiderRead:
    """
    Register a prospect.

    - **id_number**: National ID, 6-8 digits, unique.
    - **age**: 18-100.
    - **primary_phone**: Kenyan mobile number; other phones are optional.
    """
    rider = await repos.potential_riders.create(PotentialRider(**payload.model_dump(), created_by=user.id))
    logger.info(f"Registered potential rider {rider.id}")
    return PotentialRiderRead.model_validate(rider)


@router.patch(
    "/{rider_id}",
    response_model=PotentialRiderRead,
    summary="Update Potential Rider",
    description="Partially update a prospect. Only provided fields are updated.",
    responses={404: {"description": "Potential rider not found"}},
)
async def update_potential_rider(
    rider_id: str, payload: PotentialRiderUpdate, repos: RepoDep, _: CurrentUserDep
) -> PotentialRiderRead:
    rider = await repos.potential_riders.get_by_id(rider_id)
    if not rider:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Potential rider '{rider_id}' not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(rider, key, value)
    rider = await repos.potential_riders.update(rider)
    return PotentialRiderRead.model_validate(rider)
