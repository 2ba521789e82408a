from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _pay(client: AsyncClient, headers, rider_id: str, amount: float, day: str, status: str = "completed"):
    response = await client.post(
        "/api/v1/payments",
        json={"rider_id": rider_id, "amount": amount, "payment_date": day, "status": status},
        headers=headers,
    )
    assert response.status_code == 201, response.text


async def _spend(client: AsyncClient, headers, amount: float, day: str):
    response = await client.post(
        "/api/v1/expenses",
        json={"category": "maintenance", "description": "Spare parts", "amount": amount, "expense_date": day},
        headers=headers,
    )
    assert response.status_code == 201, response.text


class TestYearlyReport:
    async def test_summary_months_and_highlights(self, client: AsyncClient, admin_headers, finance_rider):
        rider = await finance_rider()
        await _pay(client, admin_headers, rider["id"], 1000, "2024-01-15")
        await _pay(client, admin_headers, rider["id"], 2000, "2024-03-02")
        await _pay(client, admin_headers, rider["id"], 1000, "2024-03-20")
        await _pay(client, admin_headers, rider["id"], 9999, "2024-03-21", status="failed")
        await _pay(client, admin_headers, rider["id"], 2000, "2023-07-01")
        await _spend(client, admin_headers, 1500, "2024-01-20")
        await _spend(client, admin_headers, 500, "2024-03-10")

        response = await client.get("/api/v1/reports/yearly", params={"year": 2024}, headers=admin_headers)
        assert response.status_code == 200
        report = response.json()

        summary = report["summary"]
        assert summary["year"] == 2024
        assert summary["total_revenue"] == 4000
        assert summary["total_expenses"] == 2000
        assert summary["net_profit"] == 2000
        assert summary["profit_margin"] == 50
        assert summary["riders_financed"] == 0
        assert summary["active_bikes"] == 1
        assert summary["average_daily_collection"] == pytest.approx(4000 / 366)
        assert summary["revenue_growth"] == 100

        months = report["months"]
        assert len(months) == 12
        assert months[0]["month_name"] == "January"
        assert months[0]["profit"] == -500
        assert months[0]["margin"] == -50
        assert months[2]["revenue"] == 3000
        assert months[2]["expenses"] == 500
        assert months[5]["margin"] == 0

        assert report["highlights"] == {
            "best_month": "March",
            "peak_revenue_month": "March",
            "most_riders_financed": 0,
        }

    async def test_riders_financed_by_creation_month(self, client: AsyncClient, admin_headers, finance_rider):
        await finance_rider()
        await finance_rider()
        today = datetime.now(timezone.utc).date()

        response = await client.get("/api/v1/reports/yearly", headers=admin_headers)
        assert response.status_code == 200
        report = response.json()
        assert report["summary"]["year"] == today.year
        assert report["summary"]["riders_financed"] == 2
        assert report["months"][today.month - 1]["riders_financed"] == 2
        assert report["highlights"]["most_riders_financed"] == 2

    async def test_empty_year(self, client: AsyncClient, admin_headers):
        response = await client.get("/api/v1/reports/yearly", params={"year": 2030}, headers=admin_headers)
        report = response.json()
        assert report["summary"]["total_revenue"] == 0
        assert report["summary"]["profit_margin"] == 0
        assert report["summary"]["revenue_growth"] == 0
        assert report["summary"]["average_daily_collection"] == 0
        assert report["highlights"]["best_month"] == "December"

    async def test_year_out_of_range(self, client: AsyncClient, admin_headers):
        response = await client.get("/api/v1/reports/yearly", params={"year": 1990}, headers=admin_headers)
        assert response.status_code == 422


class TestDashboard:
    async def test_dashboard_counts(
        self, client: AsyncClient, admin_headers, create_prospect, create_bike, finance_rider
    ):
        today = datetime.now(timezone.utc).date().isoformat()
        await create_prospect()
        paying = await finance_rider()
        await finance_rider()
        await create_bike()
        await _pay(client, admin_headers, paying["id"], 400, today)
        await _pay(client, admin_headers, paying["id"], 100, today, status="pending")

        response = await client.get("/api/v1/reports/dashboard", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {
            "potential_riders": 3,
            "financed_riders": 2,
            "total_bikes": 3,
            "total_revenue": 500,
            "active_riders": 2,
            "overdue_riders": 1,
        }
