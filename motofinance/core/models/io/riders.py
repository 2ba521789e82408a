"""
Rider I/O models for API requests and responses.

Potential riders are prospects captured by the registration form; financed
riders hold a bike and repay it through daily remittances. Optional form
fields accept empty strings, which are stored as ``None``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from motofinance.core.models.domain import OperationSlot, RiderStatus
from motofinance.core.validation import (
    FormModel,
    IdNumber,
    KenyanPhone,
    OptionalKenyanPhone,
    OptionalText,
    PartialUpdate,
    blank_to_none,
)

OptionalDate = Annotated[Optional[date], BeforeValidator(blank_to_none)]

# Statuses a financed rider can be moved to from the rider list.
CLOSING_STATUSES = (RiderStatus.completed, RiderStatus.defaulted, RiderStatus.repossessed)


# =====================================================================
# Potential riders
# =====================================================================


class PotentialRiderCreate(FormModel):
    """Registration form for a prospective rider."""

    full_name: str = Field(min_length=2, max_length=100)
    id_number: IdNumber
    age: int = Field(ge=18, le=100, description="Rider must be at least 18 years old")
    postal_address: str = Field(min_length=5, max_length=200)
    primary_phone: KenyanPhone
    secondary_phone: OptionalKenyanPhone = None
    tertiary_phone: OptionalKenyanPhone = None
    introducer_name: OptionalText = Field(default=None, max_length=100)
    introducer_id: OptionalText = Field(default=None, max_length=20)
    introducer_phone: OptionalKenyanPhone = None
    introducer_residential_area: OptionalText = Field(default=None, max_length=200)
    introducer_previous_bike: OptionalText = Field(default=None, max_length=100)
    preferred_bike_make: OptionalText = Field(default=None, max_length=100)
    probable_financing_date: OptionalDate = None


class PotentialRiderUpdate(PartialUpdate):
    """Partial update of a prospect; only the fields sent are changed."""

    clearable = frozenset(
        {
            "secondary_phone",
            "tertiary_phone",
            "introducer_name",
            "introducer_id",
            "introducer_phone",
            "introducer_residential_area",
            "introducer_previous_bike",
            "preferred_bike_make",
            "probable_financing_date",
        }
    )

    full_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    id_number: Optional[IdNumber] = None
    age: Optional[int] = Field(default=None, ge=18, le=100)
    postal_address: Optional[str] = Field(default=None, min_length=5, max_length=200)
    primary_phone: Optional[KenyanPhone] = None
    secondary_phone: OptionalKenyanPhone = None
    tertiary_phone: OptionalKenyanPhone = None
    introducer_name: OptionalText = Field(default=None, max_length=100)
    introducer_id: OptionalText = Field(default=None, max_length=20)
    introducer_phone: OptionalKenyanPhone = None
    introducer_residential_area: OptionalText = Field(default=None, max_length=200)
    introducer_previous_bike: OptionalText = Field(default=None, max_length=100)
    preferred_bike_make: OptionalText = Field(default=None, max_length=100)
    probable_financing_date: OptionalDate = None
    status: Optional[RiderStatus] = None


class PotentialRiderRead(BaseModel):
    """Schema for reading a potential rider from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    id_number: str
    age: int
    postal_address: str
    primary_phone: str
    secondary_phone: Optional[str] = None
    tertiary_phone: Optional[str] = None
    introducer_name: Optional[str] = None
    introducer_id: Optional[str] = None
    introducer_phone: Optional[str] = None
    introducer_residential_area: Optional[str] = None
    introducer_previous_bike: Optional[str] = None
    preferred_bike_make: Optional[str] = None
    probable_financing_date: Optional[date] = None
    status: RiderStatus
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# =====================================================================
# Financed riders
# =====================================================================


class FinancedRiderCreate(FormModel):
    """
    Financing form that converts a prospect into a financed rider.

    When ``potential_rider_id`` is given, personal details missing from the
    body are copied from that prospect. Without it, the personal details are
    required.
    """

    potential_rider_id: Optional[str] = Field(default=None, description="Prospect being converted")

    full_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    id_number: Optional[IdNumber] = None
    age: Optional[int] = Field(default=None, ge=18, le=100)
    postal_address: Optional[str] = Field(default=None, min_length=5, max_length=200)
    primary_phone: Optional[KenyanPhone] = None
    secondary_phone: OptionalKenyanPhone = None
    tertiary_phone: OptionalKenyanPhone = None

    residential_area: str = Field(min_length=2, max_length=200)
    operation_slot: OperationSlot
    operation_slot_cost: float = Field(default=0, ge=0, le=100_000)
    next_of_kin_name: str = Field(min_length=2, max_length=100)
    next_of_kin_phone: KenyanPhone
    next_of_kin_id: str = Field(min_length=1, max_length=20)
    next_of_kin_relationship: str = Field(min_length=2, max_length=50)
    referee_name: OptionalText = Field(default=None, max_length=100)
    referee_id: OptionalText = Field(default=None, max_length=20)
    referee_phone: OptionalKenyanPhone = None

    bike_id: str = Field(min_length=1, description="Bike handed over to the rider")
    start_date: date
    daily_remittance: float = Field(gt=0, le=100_000)
    total_investment: float = Field(gt=0, le=10_000_000)
    expected_operation_days: int = Field(ge=1, le=3650)

    @field_validator("potential_rider_id", mode="before")
    @classmethod
    def _blank_prospect(cls, value):
        return blank_to_none(value)

    @model_validator(mode="after")
    def _personal_details_present(self) -> "FinancedRiderCreate":
        if self.potential_rider_id is None:
            missing = [
                name
                for name in ("full_name", "id_number", "age", "postal_address", "primary_phone")
                if getattr(self, name) is None
            ]
            if missing:
                raise ValueError(f"Missing personal details without a potential rider: {', '.join(missing)}")
        return self


class FinancedRiderUpdate(PartialUpdate):
    """Partial update of a financed rider's contact and financing terms."""

    clearable = frozenset({"secondary_phone", "tertiary_phone", "referee_name", "referee_id", "referee_phone"})

    primary_phone: Optional[KenyanPhone] = None
    secondary_phone: OptionalKenyanPhone = None
    tertiary_phone: OptionalKenyanPhone = None
    postal_address: Optional[str] = Field(default=None, min_length=5, max_length=200)
    residential_area: Optional[str] = Field(default=None, min_length=2, max_length=200)
    operation_slot: Optional[OperationSlot] = None
    operation_slot_cost: Optional[float] = Field(default=None, ge=0, le=100_000)
    next_of_kin_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    next_of_kin_phone: Optional[KenyanPhone] = None
    next_of_kin_id: Optional[str] = Field(default=None, min_length=1, max_length=20)
    next_of_kin_relationship: Optional[str] = Field(default=None, min_length=2, max_length=50)
    referee_name: OptionalText = Field(default=None, max_length=100)
    referee_id: OptionalText = Field(default=None, max_length=20)
    referee_phone: OptionalKenyanPhone = None
    start_date: Optional[date] = None
    daily_remittance: Optional[float] = Field(default=None, gt=0, le=100_000)
    total_investment: Optional[float] = Field(default=None, gt=0, le=10_000_000)
    expected_operation_days: Optional[int] = Field(default=None, ge=1, le=3650)


class RiderStatusChange(FormModel):
    """Close a financing agreement."""

    status: RiderStatus

    @field_validator("status")
    @classmethod
    def _closing_status(cls, value):
        if RiderStatus(value) not in CLOSING_STATUSES:
            raise ValueError("Status must be one of: completed, defaulted, repossessed")
        return value


class RiderBikeSummary(BaseModel):
    """Bike columns shown next to a financed rider."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    make: str
    chassis_no: str
    engine_no: str
    registration_no: Optional[str] = None
    colour: str
    purchase_date: date


class FinancedRiderRead(BaseModel):
    """Schema for reading a financed rider, with the bike they hold."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    potential_rider_id: Optional[str] = None
    full_name: str
    id_number: str
    age: int
    postal_address: str
    primary_phone: str
    secondary_phone: Optional[str] = None
    tertiary_phone: Optional[str] = None
    residential_area: str
    operation_slot: str
    operation_slot_cost: float
    next_of_kin_name: str
    next_of_kin_phone: str
    next_of_kin_id: str
    next_of_kin_relationship: str
    referee_name: Optional[str] = None
    referee_id: Optional[str] = None
    referee_phone: Optional[str] = None
    bike_id: Optional[str] = None
    start_date: date
    daily_remittance: float
    total_investment: float
    expected_operation_days: int
    status: RiderStatus
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    bike: Optional[RiderBikeSummary] = None
