"""
Motorcycle inventory entity.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Column, ForeignKey, String
from sqlmodel import Field

from motofinance.core.models.domain import BikeStatus

from ..base import AwareDateTime, Base, new_id, utc_now


class BikeBase(Base):
    """Base fields for a bike."""

    make: str = Field(max_length=50, index=True)
    chassis_no: str = Field(max_length=50, unique=True, index=True)
    engine_no: str = Field(max_length=50, unique=True)
    registration_no: Optional[str] = Field(default=None, max_length=20, unique=True, index=True)
    colour: str = Field(max_length=30)
    purchase_date: date
    purchase_price: float
    status: str = Field(default=BikeStatus.available.value, max_length=20, index=True)


class Bike(BikeBase, table=True):
    """Entity for a motorcycle in the inventory.

    ``current_rider_id`` points back at the financed rider holding the bike,
    which closes a foreign-key cycle with ``financed_riders.bike_id``; the
    constraint is therefore added after both tables exist.

    Table: bikes
    """

    __tablename__ = "bikes"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    current_rider_id: Optional[str] = Field(
        default=None,
        sa_column=Column(
            String(36),
            ForeignKey("financed_riders.id", use_alter=True, name="fk_bikes_current_rider"),
            nullable=True,
        ),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Bike(id={self.id}, chassis_no={self.chassis_no}, status={self.status})"
