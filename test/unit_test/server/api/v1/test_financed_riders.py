import pytest
from httpx import AsyncClient

from test.unit_test.server.conftest import financing_payload

pytestmark = pytest.mark.asyncio


class TestFinanceRider:
    async def test_conversion_updates_rider_bike_and_prospect(
        self, client: AsyncClient, admin_headers, create_prospect, create_bike
    ):
        """Converting a prospect creates the rider, assigns the bike and marks the prospect financed."""
        prospect = await create_prospect(full_name="Kevin Ochieng", secondary_phone="0733000111")
        bike = await create_bike()

        response = await client.post(
            "/api/v1/financed-riders",
            json=financing_payload(prospect["id"], bike["id"], referee_name="", referee_phone=""),
            headers=admin_headers,
        )
        assert response.status_code == 201
        rider = response.json()
        assert rider["status"] == "financed"
        assert rider["potential_rider_id"] == prospect["id"]
        assert rider["full_name"] == "Kevin Ochieng"
        assert rider["id_number"] == prospect["id_number"]
        assert rider["secondary_phone"] == "0733000111"
        assert rider["referee_name"] is None
        assert rider["bike"]["id"] == bike["id"]

        bike_after = (await client.get(f"/api/v1/bikes/{bike['id']}", headers=admin_headers)).json()
        assert bike_after["status"] == "financed"
        assert bike_after["current_rider_id"] == rider["id"]

        prospect_after = (await client.get(f"/api/v1/potential-riders/{prospect['id']}", headers=admin_headers)).json()
        assert prospect_after["status"] == "financed"

    async def test_body_overrides_prospect_details(
        self, client: AsyncClient, admin_headers, create_prospect, create_bike
    ):
        prospect = await create_prospect(primary_phone="0712345678")
        bike = await create_bike()
        response = await client.post(
            "/api/v1/financed-riders",
            json=financing_payload(prospect["id"], bike["id"], primary_phone="0799888777"),
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["primary_phone"] == "0799888777"

    async def test_finance_without_prospect_needs_personal_details(
        self, client: AsyncClient, admin_headers, create_bike
    ):
        bike = await create_bike()
        response = await client.post(
            "/api/v1/financed-riders", json=financing_payload("", bike["id"]), headers=admin_headers
        )
        assert response.status_code == 422

        response = await client.post(
            "/api/v1/financed-riders",
            json=financing_payload(
                "",
                bike["id"],
                full_name="Walk In",
                id_number="7654321",
                age=40,
                postal_address="P.O. Box 9, Thika",
                primary_phone="0700111222",
            ),
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["potential_rider_id"] is None

    async def test_bike_must_be_available(self, client: AsyncClient, admin_headers, create_prospect, create_bike):
        prospect = await create_prospect()
        bike = await create_bike(status="maintenance")
        response = await client.post(
            "/api/v1/financed-riders", json=financing_payload(prospect["id"], bike["id"]), headers=admin_headers
        )
        assert response.status_code == 422
        assert "not available" in response.json()["detail"]

        prospect_after = (await client.get(f"/api/v1/potential-riders/{prospect['id']}", headers=admin_headers)).json()
        assert prospect_after["status"] == "potential"

    async def test_prospect_cannot_be_financed_twice(
        self, client: AsyncClient, admin_headers, create_prospect, create_bike, finance_rider
    ):
        prospect = await create_prospect()
        await finance_rider(prospect=prospect)
        other_bike = await create_bike()

        response = await client.post(
            "/api/v1/financed-riders", json=financing_payload(prospect["id"], other_bike["id"]), headers=admin_headers
        )
        assert response.status_code == 422

    async def test_unknown_prospect_or_bike(self, client: AsyncClient, admin_headers, create_prospect, create_bike):
        bike = await create_bike()
        response = await client.post(
            "/api/v1/financed-riders", json=financing_payload("missing", bike["id"]), headers=admin_headers
        )
        assert response.status_code == 404

        prospect = await create_prospect()
        response = await client.post(
            "/api/v1/financed-riders", json=financing_payload(prospect["id"], "missing"), headers=admin_headers
        )
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "overrides",
        [
            {"daily_remittance": 0},
            {"total_investment": -1},
            {"expected_operation_days": 0},
            {"operation_slot": "afternoon"},
            {"next_of_kin_phone": "12345"},
        ],
    )
    async def test_invalid_financing_terms(self, client: AsyncClient, admin_headers, overrides):
        response = await client.post(
            "/api/v1/financed-riders", json=financing_payload("p", "b", **overrides), headers=admin_headers
        )
        assert response.status_code == 422


class TestListFinancedRiders:
    async def test_default_list_shows_financed_riders(self, client: AsyncClient, admin_headers, finance_rider):
        active = await finance_rider()
        closed = await finance_rider()
        await client.post(
            f"/api/v1/financed-riders/{closed['id']}/status", json={"status": "completed"}, headers=admin_headers
        )

        response = await client.get("/api/v1/financed-riders", headers=admin_headers)
        assert response.status_code == 200
        assert [rider["id"] for rider in response.json()] == [active["id"]]
        assert response.json()[0]["bike"]["chassis_no"]

        response = await client.get("/api/v1/financed-riders", params={"status": "completed"}, headers=admin_headers)
        assert [rider["id"] for rider in response.json()] == [closed["id"]]

    async def test_get_financed_rider(self, client: AsyncClient, admin_headers, finance_rider):
        rider = await finance_rider()
        response = await client.get(f"/api/v1/financed-riders/{rider['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["bike"]["id"] == rider["bike_id"]

        response = await client.get("/api/v1/financed-riders/missing", headers=admin_headers)
        assert response.status_code == 404

    async def test_update_financing_terms(self, client: AsyncClient, admin_headers, finance_rider):
        rider = await finance_rider()
        response = await client.patch(
            f"/api/v1/financed-riders/{rider['id']}",
            json={"daily_remittance": 450, "operation_slot": "night"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["daily_remittance"] == 450
        assert response.json()["operation_slot"] == "night"

    async def test_update_rejects_null_for_required_fields(self, client: AsyncClient, admin_headers, finance_rider):
        rider = await finance_rider()
        response = await client.patch(
            f"/api/v1/financed-riders/{rider['id']}", json={"residential_area": None}, headers=admin_headers
        )
        assert response.status_code == 422
        assert "residential_area cannot be null" in response.text

        response = await client.patch(
            f"/api/v1/financed-riders/{rider['id']}", json={"secondary_phone": None}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["secondary_phone"] is None
        assert response.json()["residential_area"] == rider["residential_area"]


class TestChangeRiderStatus:
    async def test_completed_marks_bike_sold(self, client: AsyncClient, admin_headers, finance_rider):
        rider = await finance_rider()
        response = await client.post(
            f"/api/v1/financed-riders/{rider['id']}/status", json={"status": "completed"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "completed"

        bike = (await client.get(f"/api/v1/bikes/{rider['bike_id']}", headers=admin_headers)).json()
        assert bike["status"] == "sold"

    async def test_repossessed_frees_bike(self, client: AsyncClient, admin_headers, finance_rider):
        rider = await finance_rider()
        response = await client.post(
            f"/api/v1/financed-riders/{rider['id']}/status", json={"status": "repossessed"}, headers=admin_headers
        )
        assert response.status_code == 200

        bike = (await client.get(f"/api/v1/bikes/{rider['bike_id']}", headers=admin_headers)).json()
        assert bike["status"] == "repossessed"
        assert bike["current_rider_id"] is None

    async def test_defaulted_leaves_bike(self, client: AsyncClient, admin_headers, finance_rider):
        rider = await finance_rider()
        response = await client.post(
            f"/api/v1/financed-riders/{rider['id']}/status", json={"status": "defaulted"}, headers=admin_headers
        )
        assert response.status_code == 200

        bike = (await client.get(f"/api/v1/bikes/{rider['bike_id']}", headers=admin_headers)).json()
        assert bike["status"] == "financed"
        assert bike["current_rider_id"] == rider["id"]

    async def test_closed_agreement_cannot_change(self, client: AsyncClient, admin_headers, finance_rider):
        rider = await finance_rider()
        await client.post(
            f"/api/v1/financed-riders/{rider['id']}/status", json={"status": "completed"}, headers=admin_headers
        )
        response = await client.post(
            f"/api/v1/financed-riders/{rider['id']}/status", json={"status": "repossessed"}, headers=admin_headers
        )
        assert response.status_code == 422

    @pytest.mark.parametrize("status", ["financed", "potential", "unknown"])
    async def test_only_closing_statuses_are_accepted(self, client: AsyncClient, admin_headers, finance_rider, status):
        rider = await finance_rider()
        response = await client.post(
            f"/api/v1/financed-riders/{rider['id']}/status", json={"status": status}, headers=admin_headers
        )
        assert response.status_code == 422

    async def test_missing_rider(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/api/v1/financed-riders/missing/status", json={"status": "completed"}, headers=admin_headers
        )
        assert response.status_code == 404
