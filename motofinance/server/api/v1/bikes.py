"""
Bike Inventory Endpoints.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from motofinance.core.database.entities import Bike, FinancedRider
from motofinance.core.logging_config import get_logger
from motofinance.core.models.domain import BikeStatus
from motofinance.core.models.io.bikes import BikeCreate, BikeRead, BikeRiderSummary, BikeUpdate
from motofinance.server.services.deps import CurrentUserDep, RepoDep

logger = get_logger(__name__)

router = APIRouter()


def _to_read(bike: Bike, rider: Optional[FinancedRider]) -> BikeRead:
    return BikeRead(
        **bike.model_dump(),
        current_rider=BikeRiderSummary.model_validate(rider) if rider else None,
    )


@router.get(
    "",
    response_model=list[BikeRead],
    summary="List Bikes",
    description="List bikes, newest first, with their current rider. Search matches registration, make or chassis.",
)
async def list_bikes(
    repos: RepoDep,
    _: CurrentUserDep,
    search: Optional[str] = Query(default=None, description="Matches registration number, make or chassis number"),
    bike_status: Optional[BikeStatus] = Query(default=None, alias="status"),
) -> list[BikeRead]:
    rows = await repos.bikes.search_with_riders(status=bike_status.value if bike_status else None, search=search)
    logger.debug(f"Retrieved {len(rows)} bikes (search={search}, status={bike_status})")
    return [_to_read(bike, rider) for bike, rider in rows]


@router.get(
    "/{bike_id}",
    response_model=BikeRead,
    summary="Get Bike",
    responses={404: {"description": "Bike not found"}},
)
async def get_bike(bike_id: str, repos: RepoDep, _: CurrentUserDep) -> BikeRead:
    bike = await repos.bikes.get_by_id(bike_id)
    if not bike:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Bike '{bike_id}' not found")
    rider = await repos.financed_riders.get_by_id(bike.current_rider_id) if bike.current_rider_id else None
    return _to_read(bike, rider)


@router.post(
    "",
    response_model=BikeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Bike",
    description="Add a motorcycle to the inventory.",
    responses={
        201: {"description": "Bike added"},
        409: {"description": "Chassis, engine or registration number already registered"},
        422: {"description": "Invalid form data"},
    },
)
async def create_bike(payload: BikeCreate, repos: RepoDep, _: CurrentUserDep) -> BikeRead:
    bike = await repos.bikes.create(Bike(**payload.model_dump()))
    logger.info(f"Added bike {bike.id} ({bike.make}, chassis {bike.chassis_no})")
    return _to_read(bike, None)


@router.patch(
    "/{bike_id}",
    response_model=BikeRead,
    summary="Update Bike",
    description="Partially update a bike. Only provided fields are updated.",
    responses={
        404: {"description": "Bike not found"},
        409: {"description": "Chassis, engine or registration number already registered"},
    },
)
async def update_bike(bike_id: str, payload: BikeUpdate, repos: RepoDep, _: CurrentUserDep) -> BikeRead:
    bike = await repos.bikes.get_by_id(bike_id)
    if not bike:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Bike '{bike_id}' not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(bike, key, value)
    bike = await repos.bikes.update(bike)
    rider = await repos.financed_riders.get_by_id(bike.current_rider_id) if bike.current_rider_id else None
    return _to_read(bike, rider)
