"""
Shared fixtures for the API and service tests.

Every test gets its own in-memory SQLite database. The app's session
dependency is overridden to hand out the test session, and the SMS gateway
is replaced by a recording fake so nothing leaves the process.
"""

from __future__ import annotations

import itertools
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, List, Tuple
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set environment variable before importing app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from motofinance.core.database import Base, get_session
from motofinance.core.database import entities  # noqa: F401
from motofinance.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session
from motofinance.core.errors import SmsGatewayError
from motofinance.server.main import app
from motofinance.server.services.deps import get_sms_gateway
from motofinance.server.services.sms import SmsGateway

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
PASSWORD = "s3cret-pass"

_sequence = itertools.count(1)


class RecordingSmsGateway(SmsGateway):
    """Fake gateway: remembers every message and fails for the configured numbers."""

    def __init__(self) -> None:
        self.sent: List[Tuple[str, str]] = []
        self.failing_numbers: set[str] = set()

    async def send(self, recipient_phone: str, message: str) -> None:
        if recipient_phone in self.failing_numbers:
            raise SmsGatewayError(recipient_phone, "gateway answered 503")
        self.sent.append((recipient_phone, message))


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with the full schema."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as s:
        yield s


@pytest.fixture
def repos(session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


@pytest.fixture
def sms_gateway() -> RecordingSmsGateway:
    return RecordingSmsGateway()


@pytest.fixture
async def client(session: AsyncSession, sms_gateway: RecordingSmsGateway) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client bound to the test session and fake SMS gateway."""

    async def override_get_session():
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_sms_gateway] = lambda: sms_gateway

    @asynccontextmanager
    async def mock_lifespan(app):
        yield

    with patch("motofinance.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as ac:
            yield ac

    app.dependency_overrides.clear()


# =====================================================================
# Accounts
# =====================================================================


async def sign_up_and_in(client: AsyncClient, email: str, full_name: str = "Staff Member") -> Dict[str, str]:
    response = await client.post(
        "/api/v1/auth/sign-up",
        json={
            "full_name": full_name,
            "email": email,
            "password": PASSWORD,
            "confirm_password": PASSWORD,
        },
    )
    assert response.status_code == 201, response.text
    response = await client.post("/api/v1/auth/sign-in", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
async def admin_headers(client: AsyncClient) -> Dict[str, str]:
    """The first account registered is the admin."""
    return await sign_up_and_in(client, "admin@motofinance.co.ke", "Grace Admin")


@pytest.fixture
async def clerk_headers(client: AsyncClient, admin_headers: Dict[str, str]) -> Dict[str, str]:
    """A second account, which gets the default rider_clerk role."""
    return await sign_up_and_in(client, "clerk@motofinance.co.ke", "Peter Clerk")


# =====================================================================
# Sample data
# =====================================================================


def prospect_payload(**overrides: Any) -> Dict[str, Any]:
    n = next(_sequence)
    payload = {
        "full_name": "John Kamau",
        "id_number": f"{10000000 + n}",
        "age": 30,
        "postal_address": "P.O. Box 123, Nairobi",
        "primary_phone": "0712345678",
        "preferred_bike_make": "Boxer BM150",
    }
    payload.update(overrides)
    return payload


def bike_payload(**overrides: Any) -> Dict[str, Any]:
    n = next(_sequence)
    payload = {
        "make": "Boxer BM150",
        "chassis_no": f"MD2A11CZ{n:06d}",
        "engine_no": f"DUZWLA{n:05d}",
        "registration_no": f"KM{n:03d}A",
        "colour": "Red",
        "purchase_date": "2024-01-10",
        "purchase_price": 145000,
    }
    payload.update(overrides)
    return payload


def financing_payload(potential_rider_id: str, bike_id: str, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "potential_rider_id": potential_rider_id,
        "residential_area": "Kasarani",
        "operation_slot": "morning",
        "next_of_kin_name": "Mary Wanjiku",
        "next_of_kin_phone": "0722000111",
        "next_of_kin_id": "87654321",
        "next_of_kin_relationship": "Spouse",
        "bike_id": bike_id,
        "start_date": "2025-01-01",
        "daily_remittance": 400,
        "total_investment": 146400,
        "expected_operation_days": 366,
    }
    payload.update(overrides)
    return payload


Factory = Callable[..., Awaitable[Dict[str, Any]]]


@pytest.fixture
def create_prospect(client: AsyncClient, admin_headers: Dict[str, str]) -> Factory:
    async def _create(**overrides: Any) -> Dict[str, Any]:
        response = await client.post(
            "/api/v1/potential-riders", json=prospect_payload(**overrides), headers=admin_headers
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_bike(client: AsyncClient, admin_headers: Dict[str, str]) -> Factory:
    async def _create(**overrides: Any) -> Dict[str, Any]:
        response = await client.post("/api/v1/bikes", json=bike_payload(**overrides), headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def finance_rider(
    client: AsyncClient, admin_headers: Dict[str, str], create_prospect: Factory, create_bike: Factory
) -> Factory:
    """Register a prospect and a bike, then convert the prospect. Returns the financed rider."""

    async def _finance(prospect: Dict[str, Any] | None = None, **overrides: Any) -> Dict[str, Any]:
        prospect = prospect or await create_prospect()
        bike = await create_bike()
        response = await client.post(
            "/api/v1/financed-riders",
            json=financing_payload(prospect["id"], bike["id"], **overrides),
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _finance
