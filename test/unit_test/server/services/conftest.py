"""Fixtures that write rows straight through the repositories, bypassing the API."""

from __future__ import annotations

import itertools
from datetime import date
from typing import Any

import pytest

from motofinance.core.database.entities import Bike, BusinessExpense, FinancedRider, Payment, Profile
from motofinance.core.database.repositories import SqlRepoBundle

_sequence = itertools.count(1)


class Seed:
    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos
        self._staff: Profile | None = None

    async def staff(self) -> Profile:
        if self._staff is None:
            self._staff = await self.repos.profiles.create(
                Profile(email="seed@motofinance.co.ke", full_name="Seed Staff", role="admin", password_hash="x")
            )
        return self._staff

    async def bike(self, **overrides: Any) -> Bike:
        n = next(_sequence)
        fields = dict(
            make="Boxer BM150",
            chassis_no=f"CH{n:08d}",
            engine_no=f"EN{n:08d}",
            colour="Red",
            purchase_date=date(2024, 1, 10),
            purchase_price=145000,
        )
        fields.update(overrides)
        return await self.repos.bikes.create(Bike(**fields))

    async def rider(self, start_date: date, **overrides: Any) -> FinancedRider:
        n = next(_sequence)
        bike = await self.bike(status="financed")
        fields = dict(
            full_name=f"Rider {n}",
            id_number=f"{20000000 + n}",
            age=28,
            postal_address="P.O. Box 45, Nairobi",
            primary_phone=f"07{n:08d}",
            residential_area="Umoja",
            operation_slot="morning",
            next_of_kin_name="Kin Name",
            next_of_kin_phone="0722000111",
            next_of_kin_id="1234567",
            next_of_kin_relationship="Brother",
            bike_id=bike.id,
            start_date=start_date,
            daily_remittance=400,
            total_investment=146400,
            expected_operation_days=366,
        )
        fields.update(overrides)
        rider = await self.repos.financed_riders.create(FinancedRider(**fields))
        bike.current_rider_id = rider.id
        await self.repos.bikes.update(bike)
        return rider

    async def payment(
        self, rider: FinancedRider, amount: float, payment_date: date, status: str = "completed"
    ) -> Payment:
        return await self.repos.payments.create(
            Payment(rider_id=rider.id, amount=amount, payment_date=payment_date, status=status)
        )

    async def expense(self, amount: float, expense_date: date, category: str = "fuel") -> BusinessExpense:
        staff = await self.staff()
        return await self.repos.expenses.create(
            BusinessExpense(
                category=category,
                description="Seeded expense",
                amount=amount,
                expense_date=expense_date,
                created_by=staff.id,
            )
        )


@pytest.fixture
def seed(repos: SqlRepoBundle) -> Seed:
    return Seed(repos)
