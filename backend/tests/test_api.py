import pytest
from httpx import ASGITransport, AsyncClient

from core.exceptions import ValidationError
from main import app


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def _setup(client):
    template = (await client.post("/api/templates", json={
        "name": "Family food parcel", "category": "food", "estimated_cost": 50,
    })).json()
    courier = (await client.post("/api/couriers", json={
        "name": "Mahmoud Barakat", "phone": "+970599100001",
        "is_humanitarian_approved": True, "service_areas": ["Al-Amal"],
    })).json()
    beneficiaries = []
    for n in range(3):
        response = await client.post("/api/beneficiaries", json={
            "name": f"Beneficiary {n}",
            "national_id": f"40000000{n}",
            "address": {"governorate": "Khan Younis", "city": "Khan Younis", "district": "Al-Amal"},
        })
        assert response.status_code == 200
        beneficiaries.append(response.json())
    return template, courier, beneficiaries


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_request_round_trip(client):
    template, courier, _ = await _setup(client)

    response = await client.post("/api/requests", json={
        "requester_id": "org_1", "requester_type": "organization", "requester_name": "Gaza Relief Network",
        "type": "bulk", "target_district": "Al-Amal", "package_template_id": template["template_id"],
        "requested_quantity": 3, "priority": "urgent",
    })
    assert response.status_code == 200
    created = response.json()
    assert created["estimated_delivery_time"] == "6-12 hours"

    alerts = (await client.get("/api/alerts")).json()
    assert alerts["unread"] == 1
    assert alerts["alerts"][0]["priority"] == "high"

    response = await client.post(
        f"/api/requests/{created['request_id']}/approve",
        json={"approved_quantity": 2, "courier_id": courier["courier_id"]},
        headers={"X-Admin-Id": "adm_lina"},
    )
    assert response.status_code == 200
    assert response.json()["approved_by"] == "adm_lina"

    tasks = (await client.get("/api/tasks", params={"request_id": created["request_id"]})).json()
    assert tasks["total"] == 2

    detail = (await client.get(f"/api/requests/{created['request_id']}")).json()
    assert detail["request"]["status"] == "approved"
    assert [e["event_type"] for e in detail["timeline"]] == ["REQUEST_CREATED", "STATUS_CHANGED"]

    response = await client.post(
        f"/api/requests/{created['request_id']}/approve",
        json={"approved_quantity": 2, "courier_id": courier["courier_id"]},
    )
    assert response.status_code == 409

    task_id = tasks["tasks"][0]["task_id"]
    response = await client.put(f"/api/tasks/{task_id}/status", json={"status": "in_progress"})
    assert response.status_code == 200
    detail = (await client.get(f"/api/requests/{created['request_id']}")).json()
    assert detail["request"]["status"] == "in_progress"


async def test_reject_uses_default_admin(client):
    template, _, beneficiaries = await _setup(client)
    created = (await client.post("/api/requests", json={
        "requester_id": "fam_1", "requester_type": "family", "requester_name": "Al-Masri family",
        "type": "family_bulk", "beneficiary_ids": [b["beneficiary_id"] for b in beneficiaries],
        "package_template_id": template["template_id"], "requested_quantity": 3,
    })).json()

    response = await client.post(
        f"/api/requests/{created['request_id']}/reject", json={"rejection_reason": "Already served"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["approved_by"] == "admin"


async def test_error_status_codes(client):
    template, _, _ = await _setup(client)

    response = await client.get("/api/requests/req_missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Distribution request not found"

    response = await client.post("/api/requests", json={
        "requester_id": "org_1", "requester_type": "organization", "requester_name": "Gaza Relief Network",
        "type": "individual", "beneficiary_ids": ["ben_ghost"],
        "package_template_id": template["template_id"], "requested_quantity": 1,
    })
    assert response.status_code == 422
    assert "ben_ghost" in response.json()["detail"]

    response = await client.put("/api/couriers/cou_missing", json={"rating": 7})
    assert response.status_code == 422


def test_validation_error_is_unprocessable_entity():
    assert ValidationError("bad input").status_code == 422


async def test_reports_endpoint(client):
    await _setup(client)

    report = (await client.get("/api/reports")).json()

    assert report["beneficiaries"]["total"] == 3
    assert report["couriers"]["total"] == 1
    assert report["tasks"]["success_rate"] == 0.0
