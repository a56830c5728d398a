import pytest


@pytest.mark.anyio
async def test_create_and_list_assets(async_client, register_user, create_asset):
    user = await register_user("Ana")
    first = await create_asset(user["headers"], name="Forklift", description="Warehouse forklift")
    second = await create_asset(user["headers"], name="Compressor")

    assert first["user_id"] == user["id"]
    assert first["description"] == "Warehouse forklift"
    assert second["description"] is None

    resp = await async_client.get("/api/v1/ativos", headers=user["headers"])
    assert resp.status_code == 200, resp.text
    names = [a["name"] for a in resp.json()]
    # Newest first
    assert names == ["Compressor", "Forklift"]


@pytest.mark.anyio
async def test_list_is_scoped_to_owner(async_client, register_user, create_asset):
    ana = await register_user("Ana")
    bob = await register_user("Bob")
    await create_asset(ana["headers"], name="Ana's lathe")

    resp = await async_client.get("/api/v1/ativos", headers=bob["headers"])
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.anyio
async def test_create_asset_trims_and_validates_name(async_client, ana_headers):
    resp = await async_client.post(
        "/api/v1/ativos",
        json={"name": "  Generator  "},
        headers=ana_headers,
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["name"] == "Generator"

    resp = await async_client.post("/api/v1/ativos", json={"name": "   "}, headers=ana_headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "name"

    resp = await async_client.post("/api/v1/ativos", json={"name": "x" * 256}, headers=ana_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"


@pytest.mark.anyio
async def test_create_asset_ignores_client_owner(async_client, ana_headers, seed_users):
    resp = await async_client.post(
        "/api/v1/ativos",
        json={"name": "Pump", "user_id": seed_users["bob"].id},
        headers=ana_headers,
    )
    assert resp.status_code == 201
    assert resp.json()["user_id"] == seed_users["ana"].id


@pytest.mark.anyio
async def test_get_asset(async_client, ana_headers, create_asset):
    asset = await create_asset(ana_headers, name="Drill press")

    resp = await async_client.get(f"/api/v1/ativos/{asset['id']}", headers=ana_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Drill press"


@pytest.mark.anyio
async def test_update_asset_partial(async_client, ana_headers, create_asset):
    asset = await create_asset(ana_headers, name="Boiler", description="Basement")

    # Name only; description untouched
    resp = await async_client.put(
        f"/api/v1/ativos/{asset['id']}",
        json={"name": "Boiler #2"},
        headers=ana_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["name"] == "Boiler #2"
    assert resp.json()["description"] == "Basement"

    # Explicit null clears the description
    resp = await async_client.put(
        f"/api/v1/ativos/{asset['id']}",
        json={"description": None},
        headers=ana_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Boiler #2"
    assert resp.json()["description"] is None


@pytest.mark.anyio
async def test_update_asset_rejects_null_name(async_client, ana_headers, create_asset):
    asset = await create_asset(ana_headers, name="Chiller")

    resp = await async_client.put(
        f"/api/v1/ativos/{asset['id']}",
        json={"name": None},
        headers=ana_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["field"] == "name"


@pytest.mark.anyio
async def test_other_user_is_forbidden(async_client, ana_headers, bob_headers, create_asset):
    asset = await create_asset(ana_headers, name="Ana's truck")
    url = f"/api/v1/ativos/{asset['id']}"

    resp = await async_client.get(url, headers=bob_headers)
    assert resp.status_code == 403
    assert resp.json()["error"] == "forbidden"

    resp = await async_client.put(url, json={"name": "Stolen"}, headers=bob_headers)
    assert resp.status_code == 403

    resp = await async_client.delete(url, headers=bob_headers)
    assert resp.status_code == 403

    # Nothing changed
    resp = await async_client.get(url, headers=ana_headers)
    assert resp.json()["name"] == "Ana's truck"


@pytest.mark.anyio
async def test_missing_asset_is_not_found(async_client, ana_headers):
    resp = await async_client.get("/api/v1/ativos/999999", headers=ana_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


@pytest.mark.anyio
async def test_delete_asset_removes_its_records(async_client, ana_headers, create_asset, create_maintenance):
    asset = await create_asset(ana_headers, name="Old van")
    record = await create_maintenance(ana_headers, asset["id"], service="Oil change")

    resp = await async_client.delete(f"/api/v1/ativos/{asset['id']}", headers=ana_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Asset deleted successfully"

    resp = await async_client.get(f"/api/v1/ativos/{asset['id']}", headers=ana_headers)
    assert resp.status_code == 404

    resp = await async_client.get(f"/api/v1/manutencoes/{record['id']}", headers=ana_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_assets_require_authentication(async_client):
    resp = await async_client.get("/api/v1/ativos")
    assert resp.status_code == 401


@pytest.mark.anyio
@pytest.mark.parametrize("asset_id", ["0", "99999999999999999999"])
async def test_asset_id_out_of_range(async_client, ana_headers, asset_id):
    resp = await async_client.get(f"/api/v1/ativos/{asset_id}", headers=ana_headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "asset_id"

    resp = await async_client.get(f"/api/v1/ativos/{asset_id}/manutencoes", headers=ana_headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "asset_id"
