"""
Rider entity models.

Potential riders are prospects registered by a clerk. Converting a prospect
creates a financed rider, which holds one bike and repays its total
investment through daily remittances.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field

from motofinance.core.models.domain import RiderStatus

from ..base import AwareDateTime, Base, new_id, utc_now


class RiderPersonalBase(Base):
    """Personal details shared by prospects and financed riders."""

    full_name: str = Field(max_length=100, index=True)
    age: int
    postal_address: str = Field(max_length=200)
    primary_phone: str = Field(max_length=20)
    secondary_phone: Optional[str] = Field(default=None, max_length=20)
    tertiary_phone: Optional[str] = Field(default=None, max_length=20)


class PotentialRiderBase(RiderPersonalBase):
    """Base fields for a prospective rider."""

    id_number: str = Field(max_length=8, unique=True, index=True)

    # Introducer
    introducer_name: Optional[str] = Field(default=None, max_length=100)
    introducer_id: Optional[str] = Field(default=None, max_length=20)
    introducer_phone: Optional[str] = Field(default=None, max_length=20)
    introducer_residential_area: Optional[str] = Field(default=None, max_length=200)
    introducer_previous_bike: Optional[str] = Field(default=None, max_length=100)

    preferred_bike_make: Optional[str] = Field(default=None, max_length=100)
    probable_financing_date: Optional[date] = Field(default=None)
    status: str = Field(default=RiderStatus.potential.value, max_length=20, index=True)


class PotentialRider(PotentialRiderBase, table=True):
    """Entity for a financing prospect.

    Table: potential_riders
    """

    __tablename__ = "potential_riders"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    created_by: Optional[str] = Field(default=None, foreign_key="profiles.id", max_length=36)

    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"PotentialRider(id={self.id}, id_number={self.id_number}, status={self.status})"


class FinancedRiderBase(RiderPersonalBase):
    """Base fields for a financed rider."""

    id_number: str = Field(max_length=8, index=True)
    residential_area: str = Field(max_length=200)
    operation_slot: str = Field(max_length=20, description="morning, evening or night")
    operation_slot_cost: float = Field(default=0)

    # Referee
    referee_name: Optional[str] = Field(default=None, max_length=100)
    referee_id: Optional[str] = Field(default=None, max_length=20)
    referee_phone: Optional[str] = Field(default=None, max_length=20)

    # Next of kin
    next_of_kin_name: str = Field(max_length=100)
    next_of_kin_id: str = Field(max_length=20)
    next_of_kin_phone: str = Field(max_length=20)
    next_of_kin_relationship: str = Field(max_length=50)

    # Financing terms
    start_date: date = Field(index=True)
    daily_remittance: float
    total_investment: float
    expected_operation_days: int
    status: str = Field(default=RiderStatus.financed.value, max_length=20, index=True)


class FinancedRider(FinancedRiderBase, table=True):
    """Entity for a rider holding a financed bike.

    Table: financed_riders
    """

    __tablename__ = "financed_riders"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    bike_id: Optional[str] = Field(default=None, foreign_key="bikes.id", max_length=36, index=True)
    potential_rider_id: Optional[str] = Field(default=None, foreign_key="potential_riders.id", max_length=36)
    created_by: Optional[str] = Field(default=None, foreign_key="profiles.id", max_length=36)

    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"FinancedRider(id={self.id}, id_number={self.id_number}, status={self.status})"
