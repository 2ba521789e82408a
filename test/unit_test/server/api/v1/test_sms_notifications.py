from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from motofinance.server.main import app
from motofinance.server.services.deps import get_sms_gateway
from motofinance.server.services.sms import HttpSmsGateway

pytestmark = pytest.mark.asyncio


def _manual(**overrides):
    body = {
        "recipient_phone": "0712345678",
        "message": "Please bring the bike in for service on Saturday.",
    }
    body.update(overrides)
    return body


class TestSendSms:
    async def test_send_manual_sms(self, client: AsyncClient, admin_headers, sms_gateway):
        response = await client.post("/api/v1/sms-notifications", json=_manual(rider_id=""), headers=admin_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "sent"
        assert data["message_type"] == "manual"
        assert data["rider_id"] is None
        assert data["sent_at"] is not None
        assert sms_gateway.sent == [("0712345678", "Please bring the bike in for service on Saturday.")]

    async def test_gateway_failure_is_recorded(self, client: AsyncClient, admin_headers, sms_gateway):
        sms_gateway.failing_numbers.add("0712345678")
        response = await client.post("/api/v1/sms-notifications", json=_manual(), headers=admin_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "failed"
        assert "503" in data["error_message"]
        assert data["sent_at"] is None

    async def test_misconfigured_gateway_url_is_recorded(self, client: AsyncClient, admin_headers):
        app.dependency_overrides[get_sms_gateway] = lambda: HttpSmsGateway(url="http://sms.example.co.ke:port/send")
        response = await client.post("/api/v1/sms-notifications", json=_manual(), headers=admin_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "failed"
        assert "Invalid port" in data["error_message"]

    async def test_send_to_rider(self, client: AsyncClient, admin_headers, finance_rider):
        rider = await finance_rider()
        response = await client.post(
            "/api/v1/sms-notifications",
            json=_manual(rider_id=rider["id"], message_type="general"),
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["rider_id"] == rider["id"]

    async def test_unknown_rider(self, client: AsyncClient, admin_headers):
        payload = _manual(rider_id="missing")
        response = await client.post("/api/v1/sms-notifications", json=payload, headers=admin_headers)
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "overrides",
        [{"recipient_phone": "0812345678"}, {"message": "Too short"}, {"message": "x" * 161}, {"message_type": "spam"}],
    )
    async def test_invalid_sms(self, client: AsyncClient, admin_headers, sms_gateway, overrides):
        response = await client.post("/api/v1/sms-notifications", json=_manual(**overrides), headers=admin_headers)
        assert response.status_code == 422
        assert sms_gateway.sent == []


class TestSmsLog:
    async def test_list_search_and_stats(self, client: AsyncClient, admin_headers, sms_gateway):
        sms_gateway.failing_numbers.add("0799000000")
        for phone in ("0712345678", "0722000000", "0733000000", "0799000000"):
            payload = _manual(recipient_phone=phone)
            await client.post("/api/v1/sms-notifications", json=payload, headers=admin_headers)

        response = await client.get("/api/v1/sms-notifications", headers=admin_headers)
        assert response.status_code == 200
        assert [sms["recipient_phone"] for sms in response.json()] == [
            "0799000000",
            "0733000000",
            "0722000000",
            "0712345678",
        ]

        response = await client.get("/api/v1/sms-notifications", params={"search": "0722"}, headers=admin_headers)
        assert [sms["recipient_phone"] for sms in response.json()] == ["0722000000"]

        response = await client.get("/api/v1/sms-notifications", params={"limit": 2}, headers=admin_headers)
        assert len(response.json()) == 2

        response = await client.get("/api/v1/sms-notifications/stats", headers=admin_headers)
        assert response.json() == {"total": 4, "sent": 3, "pending": 0, "failed": 1, "delivery_rate": 75.0}

    async def test_stats_without_messages(self, client: AsyncClient, admin_headers):
        response = await client.get("/api/v1/sms-notifications/stats", headers=admin_headers)
        assert response.json() == {"total": 0, "sent": 0, "pending": 0, "failed": 0, "delivery_rate": 0.0}

    async def test_limit_is_capped(self, client: AsyncClient, admin_headers):
        response = await client.get("/api/v1/sms-notifications", params={"limit": 500}, headers=admin_headers)
        assert response.status_code == 422


class TestAutomation:
    async def test_automation_runs_every_rule_once(
        self, client: AsyncClient, admin_headers, finance_rider, sms_gateway
    ):
        today = datetime.now(timezone.utc).date()
        await finance_rider(start_date=(today - timedelta(days=366)).isoformat())
        paying = await finance_rider(start_date=today.isoformat())
        await client.post(
            "/api/v1/payments",
            json={"rider_id": paying["id"], "amount": 400, "payment_date": today.isoformat()},
            headers=admin_headers,
        )

        response = await client.post("/api/v1/sms-notifications/automation", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {
            "payment_confirmation": 1,
            "payment_reminder": 1,
            "late_payment_warning": 1,
            "repossession_notice": 1,
            "ownership_congratulations": 1,
            "failed": 0,
        }
        assert len(sms_gateway.sent) == 5

        response = await client.post("/api/v1/sms-notifications/automation", headers=admin_headers)
        assert response.json() == {
            "payment_confirmation": 0,
            "payment_reminder": 0,
            "late_payment_warning": 0,
            "repossession_notice": 0,
            "ownership_congratulations": 0,
            "failed": 0,
        }

    async def test_rules_can_be_switched_off(self, client: AsyncClient, admin_headers, finance_rider, sms_gateway):
        today = datetime.now(timezone.utc).date()
        await finance_rider(start_date=(today - timedelta(days=30)).isoformat())

        response = await client.post(
            "/api/v1/sms-notifications/automation",
            json={"late_payment_warning": False, "repossession_notice": False},
            headers=admin_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["payment_reminder"] == 1
        assert data["late_payment_warning"] == 0
        assert data["repossession_notice"] == 0
        assert len(sms_gateway.sent) == 1
