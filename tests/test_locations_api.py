"""Tests API batiments, salles et types / Building, room and device type API tests."""

import pytest

from edms.database import async_session
from edms.models import EmergencyDevice


@pytest.mark.asyncio
async def test_list_buildings_by_site(client, seeded, user_headers, admin_headers):
    resp = await client.get("/api/building/", params={"siteId": seeded["site_id"]}, headers=user_headers)
    assert resp.status_code == 200
    [building] = resp.json()
    assert building["code"] == "A"
    assert building["site_name"] == "Main Campus"

    resp = await client.get("/api/building/", params={"siteId": 9999}, headers=user_headers)
    assert resp.json() == []


@pytest.mark.asyncio
async def test_building_crud(client, seeded, admin_headers):
    resp = await client.post(
        "/api/building/", json={"site_id": seeded["site_id"], "code": "B"}, headers=admin_headers,
    )
    assert resp.status_code == 201
    building_id = resp.json()["id"]

    resp = await client.post(
        "/api/building/", json={"site_id": seeded["site_id"], "code": "B"}, headers=admin_headers,
    )
    assert resp.status_code == 409

    resp = await client.put(f"/api/building/{building_id}", json={"code": "C"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["code"] == "C"

    resp = await client.delete(f"/api/building/{building_id}", headers=admin_headers)
    assert resp.status_code == 204
    resp = await client.get(f"/api/building/{building_id}", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_building_requires_existing_site(client, seeded, admin_headers):
    resp = await client.post("/api/building/", json={"site_id": 9999, "code": "Z"}, headers=admin_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_delete_building_with_rooms_rejected(client, seeded, admin_headers):
    resp = await client.delete(f"/api/building/{seeded['building_id']}", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Cannot delete building with associated rooms"


@pytest.mark.asyncio
async def test_list_rooms_by_building(client, seeded, user_headers):
    resp = await client.get("/api/room/", params={"buildingId": seeded["building_id"]}, headers=user_headers)
    [room] = resp.json()
    assert room["code"] == "A1"
    assert room["building_code"] == "A"
    assert room["site_name"] == "Main Campus"


@pytest.mark.asyncio
async def test_room_crud(client, seeded, admin_headers):
    resp = await client.post(
        "/api/room/", json={"building_id": seeded["building_id"], "code": "A2"}, headers=admin_headers,
    )
    assert resp.status_code == 201
    room_id = resp.json()["id"]

    resp = await client.put(f"/api/room/{room_id}", json={"code": "A1"}, headers=admin_headers)
    assert resp.status_code == 409

    resp = await client.delete(f"/api/room/{room_id}", headers=admin_headers)
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_delete_room_with_devices_rejected(client, seeded, admin_headers):
    resp = await client.delete(f"/api/room/{seeded['room_id']}", headers=admin_headers)
    assert resp.status_code == 400

    async with async_session() as s:
        await s.delete(await s.get(EmergencyDevice, seeded["device_id"]))
        await s.commit()
    resp = await client.delete(f"/api/room/{seeded['room_id']}", headers=admin_headers)
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_device_type_lists(client, seeded, user_headers):
    resp = await client.get("/api/emergency-device-type/", headers=user_headers)
    assert [t["name"] for t in resp.json()] == ["Fire Extinguisher"]
    resp = await client.get("/api/extinguisher-type/", headers=user_headers)
    assert [t["name"] for t in resp.json()] == ["CO2"]


@pytest.mark.asyncio
async def test_extinguisher_type_crud(client, seeded, admin_headers, user_headers):
    resp = await client.post("/api/extinguisher-type/", json={"name": "Foam"}, headers=user_headers)
    assert resp.status_code == 403

    resp = await client.post("/api/extinguisher-type/", json={"name": "Foam"}, headers=admin_headers)
    assert resp.status_code == 201
    type_id = resp.json()["id"]

    resp = await client.post("/api/extinguisher-type/", json={"name": "Foam"}, headers=admin_headers)
    assert resp.status_code == 409

    resp = await client.put(f"/api/extinguisher-type/{type_id}", json={"name": "Wet Chemical"}, headers=admin_headers)
    assert resp.json()["name"] == "Wet Chemical"

    resp = await client.delete(f"/api/extinguisher-type/{type_id}", headers=admin_headers)
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_delete_type_in_use_rejected(client, seeded, admin_headers):
    resp = await client.delete(
        f"/api/emergency-device-type/{seeded['device_type_id']}", headers=admin_headers,
    )
    assert resp.status_code == 400
    resp = await client.delete(
        f"/api/extinguisher-type/{seeded['extinguisher_type_id']}", headers=admin_headers,
    )
    assert resp.status_code == 400
