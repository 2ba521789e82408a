"""
Bike inventory I/O models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from motofinance.core.models.domain import BikeStatus
from motofinance.core.validation import FormModel, OptionalText, PartialUpdate


class BikeCreate(FormModel):
    """Schema for adding a bike to the inventory."""

    make: str = Field(min_length=2, max_length=50)
    chassis_no: str = Field(min_length=5, max_length=50)
    engine_no: str = Field(min_length=5, max_length=50)
    registration_no: OptionalText = Field(default=None, max_length=20)
    colour: str = Field(min_length=2, max_length=30)
    purchase_date: date
    purchase_price: float = Field(gt=0, le=10_000_000)
    status: BikeStatus = BikeStatus.available


class BikeUpdate(PartialUpdate):
    """Schema for partially updating a bike."""

    clearable = frozenset({"registration_no"})

    make: Optional[str] = Field(default=None, min_length=2, max_length=50)
    chassis_no: Optional[str] = Field(default=None, min_length=5, max_length=50)
    engine_no: Optional[str] = Field(default=None, min_length=5, max_length=50)
    registration_no: OptionalText = Field(default=None, max_length=20)
    colour: Optional[str] = Field(default=None, min_length=2, max_length=30)
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = Field(default=None, gt=0, le=10_000_000)
    status: Optional[BikeStatus] = None


class BikeRiderSummary(BaseModel):
    """Rider columns shown next to a bike they currently hold."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    primary_phone: str
    start_date: date
    daily_remittance: float


class BikeRead(BaseModel):
    """Schema for reading a bike, with its current rider if any."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    make: str
    chassis_no: str
    engine_no: str
    registration_no: Optional[str] = None
    colour: str
    purchase_date: date
    purchase_price: float
    status: BikeStatus
    current_rider_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    current_rider: Optional[BikeRiderSummary] = None
