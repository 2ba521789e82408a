from typing import Dict

import pytest
from httpx import AsyncClient

from test.unit_test.server.conftest import PASSWORD, sign_up_and_in

pytestmark = pytest.mark.asyncio


def _sign_up_body(email: str = "jane@motofinance.co.ke", **overrides) -> Dict[str, str]:
    body = {
        "full_name": "Jane Njeri",
        "email": email,
        "password": PASSWORD,
        "confirm_password": PASSWORD,
    }
    body.update(overrides)
    return body


class TestSignUp:
    async def test_first_account_is_admin(self, client: AsyncClient):
        """The very first profile gets the admin role so someone can manage roles."""
        response = await client.post("/api/v1/auth/sign-up", json=_sign_up_body("first@motofinance.co.ke"))
        assert response.status_code == 201
        data = response.json()
        assert data["role"] == "admin"
        assert data["email"] == "first@motofinance.co.ke"
        assert "password_hash" not in data

    async def test_later_accounts_get_default_role(self, client: AsyncClient):
        await client.post("/api/v1/auth/sign-up", json=_sign_up_body("first@motofinance.co.ke"))
        response = await client.post("/api/v1/auth/sign-up", json=_sign_up_body("second@motofinance.co.ke"))
        assert response.status_code == 201
        assert response.json()["role"] == "rider_clerk"

    async def test_email_is_stored_lower_case_and_unique(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/sign-up", json=_sign_up_body("Jane@MotoFinance.co.ke"))
        assert response.json()["email"] == "jane@motofinance.co.ke"

        response = await client.post("/api/v1/auth/sign-up", json=_sign_up_body("jane@motofinance.co.ke"))
        assert response.status_code == 409

    async def test_password_mismatch_is_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/sign-up",
            json=_sign_up_body("jane@motofinance.co.ke", confirm_password="something-else"),
        )
        assert response.status_code == 422
        assert "Passwords do not match" in response.text

    @pytest.mark.parametrize(
        "overrides",
        [
            {"full_name": "J"},
            {"email": "not-an-email"},
            {"password": "short", "confirm_password": "short"},
            {"phone": "0812345678"},
        ],
    )
    async def test_invalid_form_is_rejected(self, client: AsyncClient, overrides):
        response = await client.post("/api/v1/auth/sign-up", json=_sign_up_body(**overrides))
        assert response.status_code == 422


class TestSignIn:
    async def test_sign_in_returns_bearer_token(self, client: AsyncClient):
        await client.post("/api/v1/auth/sign-up", json=_sign_up_body("jane@motofinance.co.ke"))
        response = await client.post(
            "/api/v1/auth/sign-in", json={"email": "jane@motofinance.co.ke", "password": PASSWORD}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["profile"]["email"] == "jane@motofinance.co.ke"

    async def test_wrong_password_is_unauthorized(self, client: AsyncClient):
        await client.post("/api/v1/auth/sign-up", json=_sign_up_body("jane@motofinance.co.ke"))
        response = await client.post(
            "/api/v1/auth/sign-in", json={"email": "jane@motofinance.co.ke", "password": "wrong-password"}
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_unknown_email_is_unauthorized(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/sign-in", json={"email": "nobody@motofinance.co.ke", "password": PASSWORD}
        )
        assert response.status_code == 401


class TestSession:
    async def test_session_returns_profile(self, client: AsyncClient, admin_headers):
        response = await client.get("/api/v1/auth/session", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["email"] == "admin@motofinance.co.ke"

    async def test_missing_token_is_unauthorized(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/session")
        assert response.status_code == 401

    async def test_unknown_token_is_unauthorized(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/session", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    async def test_sign_out_revokes_token(self, client: AsyncClient):
        headers = await sign_up_and_in(client, "jane@motofinance.co.ke")
        response = await client.post("/api/v1/auth/sign-out", headers=headers)
        assert response.status_code == 204

        response = await client.get("/api/v1/auth/session", headers=headers)
        assert response.status_code == 401

    async def test_protected_endpoints_need_a_session(self, client: AsyncClient):
        for path in ("/api/v1/potential-riders", "/api/v1/bikes", "/api/v1/payments", "/api/v1/reports/dashboard"):
            response = await client.get(path)
            assert response.status_code == 401, path
