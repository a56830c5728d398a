from datetime import date, timedelta

import pytest


@pytest.mark.anyio
async def test_create_and_list_records_with_status(async_client, ana_headers, create_asset, create_maintenance):
    asset = await create_asset(ana_headers, name="Forklift")
    today = date.today()

    await create_maintenance(ana_headers, asset["id"], service="Oil change", expected_at=str(today - timedelta(days=2)))
    await create_maintenance(ana_headers, asset["id"], service="Brakes", expected_at=str(today + timedelta(days=3)))
    await create_maintenance(ana_headers, asset["id"], service="Tires", expected_at=str(today + timedelta(days=30)))
    await create_maintenance(ana_headers, asset["id"], service="Paint", expected_at=str(today), done=True)
    await create_maintenance(ana_headers, asset["id"], service="Inspection")

    resp = await async_client.get(f"/api/v1/ativos/{asset['id']}/manutencoes", headers=ana_headers)
    assert resp.status_code == 200, resp.text
    records = resp.json()

    # Newest first
    assert [r["service"] for r in records] == ["Inspection", "Paint", "Tires", "Brakes", "Oil change"]

    statuses = {r["service"]: r["status"] for r in records}
    assert statuses["Oil change"]["status"] == "OVERDUE"
    assert statuses["Oil change"]["urgency"] == "HIGH"
    assert statuses["Brakes"]["status"] == "UPCOMING"
    assert statuses["Brakes"]["days_until"] == 3
    assert statuses["Brakes"]["label"] == "Upcoming (3d)"
    assert statuses["Tires"]["status"] == "SCHEDULED"
    assert statuses["Paint"]["status"] == "COMPLETED"
    assert statuses["Inspection"]["status"] == "INVALID"


@pytest.mark.anyio
async def test_create_record_fields(async_client, ana_headers, create_asset):
    asset = await create_asset(ana_headers, name="Generator")

    resp = await async_client.post(
        f"/api/v1/ativos/{asset['id']}/manutencoes",
        json={
            "service": "  Filter change  ",
            "expected_at": "2030-03-01",
            "description": "Air and fuel filters",
            "condition_next_maintenance": "Every 250 hours",
            "date_next_maintenance": "2030-09-01",
        },
        headers=ana_headers,
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["asset_id"] == asset["id"]
    assert data["service"] == "Filter change"
    assert data["expected_at"] == "2030-03-01"
    assert data["performed_at"] is None
    assert data["done"] is None
    assert data["condition_next_maintenance"] == "Every 250 hours"
    assert data["date_next_maintenance"] == "2030-09-01"


@pytest.mark.anyio
async def test_create_record_validation(async_client, ana_headers, create_asset):
    asset = await create_asset(ana_headers, name="Pump")
    url = f"/api/v1/ativos/{asset['id']}/manutencoes"

    resp = await async_client.post(url, json={"service": "   "}, headers=ana_headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "service"

    resp = await async_client.post(url, json={"service": "Oil", "expected_at": "not-a-date"}, headers=ana_headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "expected_at"


@pytest.mark.anyio
async def test_create_record_on_missing_asset(async_client, ana_headers):
    resp = await async_client.post(
        "/api/v1/ativos/999999/manutencoes",
        json={"service": "Oil change"},
        headers=ana_headers,
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Associated asset not found"


@pytest.mark.anyio
async def test_get_update_delete_record(async_client, ana_headers, create_asset, create_maintenance):
    asset = await create_asset(ana_headers, name="Compressor")
    record = await create_maintenance(
        ana_headers, asset["id"], service="Belt", expected_at="2030-01-10", description="Check tension"
    )
    url = f"/api/v1/manutencoes/{record['id']}"

    resp = await async_client.get(url, headers=ana_headers)
    assert resp.status_code == 200
    assert resp.json()["service"] == "Belt"

    # Mark done; untouched fields survive
    resp = await async_client.put(
        url,
        json={"done": True, "performed_at": "2030-01-09"},
        headers=ana_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["done"] is True
    assert data["performed_at"] == "2030-01-09"
    assert data["description"] == "Check tension"
    assert data["status"]["status"] == "COMPLETED"

    # Explicit null clears
    resp = await async_client.put(url, json={"description": None}, headers=ana_headers)
    assert resp.status_code == 200
    assert resp.json()["description"] is None
    assert resp.json()["service"] == "Belt"

    resp = await async_client.put(url, json={"service": None}, headers=ana_headers)
    assert resp.status_code == 400

    resp = await async_client.delete(url, headers=ana_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Maintenance record deleted successfully"

    resp = await async_client.get(url, headers=ana_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Maintenance record not found"


@pytest.mark.anyio
async def test_records_follow_asset_ownership(
    async_client, ana_headers, bob_headers, create_asset, create_maintenance
):
    asset = await create_asset(ana_headers, name="Ana's crane")
    record = await create_maintenance(ana_headers, asset["id"], service="Cable check")

    resp = await async_client.get(f"/api/v1/ativos/{asset['id']}/manutencoes", headers=bob_headers)
    assert resp.status_code == 403

    resp = await async_client.post(
        f"/api/v1/ativos/{asset['id']}/manutencoes",
        json={"service": "Sabotage"},
        headers=bob_headers,
    )
    assert resp.status_code == 403

    url = f"/api/v1/manutencoes/{record['id']}"
    for method, kwargs in [("get", {}), ("put", {"json": {"done": True}}), ("delete", {})]:
        resp = await getattr(async_client, method)(url, headers=bob_headers, **kwargs)
        assert resp.status_code == 403, method
        assert resp.json()["error"] == "forbidden"

    resp = await async_client.get(url, headers=ana_headers)
    assert resp.json()["done"] is None


@pytest.mark.anyio
async def test_oil_change_overdue_end_to_end(async_client, register_user):
    """Register, add an asset, log an overdue record, then see it on the dashboard."""
    ana = await register_user("Ana")
    yesterday = str(date.today() - timedelta(days=1))

    resp = await async_client.post("/api/v1/ativos", json={"name": "Forklift"}, headers=ana["headers"])
    assert resp.status_code == 201
    asset_id = resp.json()["id"]

    resp = await async_client.post(
        f"/api/v1/ativos/{asset_id}/manutencoes",
        json={"service": "Oil change", "expected_at": yesterday},
        headers=ana["headers"],
    )
    assert resp.status_code == 201
    assert resp.json()["status"]["status"] == "OVERDUE"
    assert resp.json()["status"]["label"] == "Overdue"

    resp = await async_client.get("/api/v1/dashboard", headers=ana["headers"])
    assert resp.status_code == 200, resp.text
    assets = resp.json()["assets"]
    assert len(assets) == 1
    assert assets[0]["name"] == "Forklift"
    assert assets[0]["most_relevant_maintenance_date"] == yesterday
    assert assets[0]["highest_urgency"] == "HIGH"

    # A stranger sees neither the asset nor its records
    bob = await register_user("Bob")
    resp = await async_client.get(f"/api/v1/ativos/{asset_id}/manutencoes", headers=bob["headers"])
    assert resp.status_code == 403
    resp = await async_client.get("/api/v1/dashboard", headers=bob["headers"])
    assert resp.json()["assets"] == []


@pytest.mark.anyio
@pytest.mark.parametrize("maintenance_id", ["0", "-3", "99999999999999999999"])
async def test_record_id_out_of_range(async_client, ana_headers, maintenance_id):
    resp = await async_client.get(f"/api/v1/manutencoes/{maintenance_id}", headers=ana_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"
    assert resp.json()["field"] == "maintenance_id"
