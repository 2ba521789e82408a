"""
Financing Service.

Converting a prospect hands a bike to a new financed rider, and closing a
financing agreement decides what happens to that bike. Both touch several
rows, which are committed together.
"""

from __future__ import annotations

from typing import Optional, Tuple

from motofinance.core.database.entities import Bike, FinancedRider
from motofinance.core.database.repositories import SqlRepoBundle
from motofinance.core.errors import BusinessRuleError, NotFoundError
from motofinance.core.logging_config import get_logger
from motofinance.core.models.domain import BikeStatus, RiderStatus
from motofinance.core.models.io.riders import FinancedRiderCreate, FinancedRiderUpdate

logger = get_logger(__name__)

# Personal details that can be copied over from the prospect.
PERSONAL_FIELDS = (
    "full_name",
    "id_number",
    "age",
    "postal_address",
    "primary_phone",
    "secondary_phone",
    "tertiary_phone",
)

# Riders in these states no longer hold their bike.
CLOSED_STATUSES = (RiderStatus.completed.value, RiderStatus.repossessed.value)


async def convert_to_financed(
    repos: SqlRepoBundle,
    payload: FinancedRiderCreate,
    created_by: Optional[str] = None,
) -> Tuple[FinancedRider, Bike]:
    """
    Create a financed rider and give them a bike.

    Effects, committed together: the rider row is inserted as ``financed``,
    the bike becomes ``financed`` with the rider as its current rider, and the
    prospect (when given) is marked ``financed``.

    Raises:
        NotFoundError: If the prospect or the bike does not exist.
        BusinessRuleError: If the prospect was already converted or the bike is not available.
    """
    data = payload.model_dump(exclude={"potential_rider_id"})

    prospect = None
    if payload.potential_rider_id is not None:
        prospect = await repos.potential_riders.get_by_id(payload.potential_rider_id)
        if prospect is None:
            raise NotFoundError("Potential rider", payload.potential_rider_id)
        if prospect.status != RiderStatus.potential.value:
            raise BusinessRuleError(f"Potential rider '{prospect.id}' is already {prospect.status}")
        for name in PERSONAL_FIELDS:
            if data.get(name) is None:
                data[name] = getattr(prospect, name)

    bike = await repos.bikes.get_by_id(payload.bike_id)
    if bike is None:
        raise NotFoundError("Bike", payload.bike_id)
    if bike.status != BikeStatus.available.value:
        raise BusinessRuleError(f"Bike '{bike.id}' is not available (status: {bike.status})")

    rider = FinancedRider(
        **data,
        potential_rider_id=prospect.id if prospect else None,
        status=RiderStatus.financed.value,
        created_by=created_by,
    )
    await repos.financed_riders.stage(rider)

    bike.status = BikeStatus.financed.value
    bike.current_rider_id = rider.id
    await repos.bikes.stage(bike)

    if prospect is not None:
        prospect.status = RiderStatus.financed.value
        await repos.potential_riders.stage(prospect)

    await repos.financed_riders.commit()
    logger.info(f"Financed rider {rider.id} with bike {bike.id}")
    return rider, bike


async def update_financed_rider(repos: SqlRepoBundle, rider_id: str, payload: FinancedRiderUpdate) -> FinancedRider:
    rider = await repos.financed_riders.get_by_id(rider_id)
    if rider is None:
        raise NotFoundError("Financed rider", rider_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(rider, key, value)
    return await repos.financed_riders.update(rider)


async def change_rider_status(repos: SqlRepoBundle, rider_id: str, status: str) -> FinancedRider:
    """
    Close a financing agreement.

    ``completed`` marks the bike ``sold``; ``repossessed`` marks it
    ``repossessed`` and frees it from the rider; ``defaulted`` leaves the
    bike untouched. Riders already completed or repossessed cannot change
    status again.

    Raises:
        NotFoundError: If the rider does not exist.
        BusinessRuleError: If the rider's agreement is already closed.
    """
    rider = await repos.financed_riders.get_by_id(rider_id)
    if rider is None:
        raise NotFoundError("Financed rider", rider_id)
    if rider.status in CLOSED_STATUSES:
        raise BusinessRuleError(f"Financed rider '{rider.id}' is already {rider.status}")

    new_status = RiderStatus(status)
    rider.status = new_status.value
    await repos.financed_riders.stage(rider)

    bike = await repos.bikes.get_by_id(rider.bike_id) if rider.bike_id else None
    if bike is not None:
        if new_status is RiderStatus.completed:
            bike.status = BikeStatus.sold.value
            await repos.bikes.stage(bike)
        elif new_status is RiderStatus.repossessed:
            bike.status = BikeStatus.repossessed.value
            bike.current_rider_id = None
            await repos.bikes.stage(bike)

    await repos.financed_riders.commit()
    logger.info(f"Financed rider {rider.id} is now {rider.status}")
    return rider
