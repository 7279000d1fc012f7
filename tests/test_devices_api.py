"""Tests API appareils / Emergency device API tests."""

from datetime import date, timedelta
from urllib.parse import unquote

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from edms.database import async_session
from edms.models import EmergencyDevice, Inspection
from edms.services.device_repository import DeviceRepository


def _form(seeded, **overrides):
    form = {
        "room_id": str(seeded["room_id"]),
        "emergency_device_type": str(seeded["device_type_id"]),
        "extinguisher_type": str(seeded["extinguisher_type_id"]),
        "serial_number": "SN00099",
        "manufacture_date": "2023-05-01",
        "size": "2kg",
        "description": "Server room",
        "status": "Active",
    }
    form.update(overrides)
    return form


def _json(seeded, **overrides):
    body = {
        "room_id": seeded["room_id"],
        "emergency_device_type_id": seeded["device_type_id"],
        "extinguisher_type_id": "",
        "serial_number": "SN00001-B",
        "manufacture_date": "2021-03-01",
        "size": "9kg",
        "description": "Moved to the hall",
        "status": "Inactive",
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_list_requires_authentication(client, seeded):
    resp = await client.get("/api/emergency-device/")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_list_devices_with_derived_dates(client, seeded, user_headers):
    resp = await client.get("/api/emergency-device/", headers=user_headers)
    assert resp.status_code == 200
    [device] = resp.json()
    assert device["serial_number"] == "SN00001"
    assert device["site_name"] == "Main Campus"
    assert device["building_code"] == "A"
    assert device["room_code"] == "A1"
    assert device["emergency_device_type_name"] == "Fire Extinguisher"
    assert device["extinguisher_type_name"] == "CO2"
    assert device["expire_date"] == "2025-02-28"
    assert device["next_inspection_date"] == "2024-04-01"


@pytest.mark.asyncio
async def test_list_filters(client, seeded, user_headers):
    params = {"site_id": seeded["site_id"], "building_code": "A"}
    resp = await client.get("/api/emergency-device/", params=params, headers=user_headers)
    assert len(resp.json()) == 1

    resp = await client.get("/api/emergency-device/", params={"building_code": "Z"}, headers=user_headers)
    assert resp.json() == []

    resp = await client.get("/api/emergency-device/", params={"site_id": ""}, headers=user_headers)
    assert len(resp.json()) == 1

    resp = await client.get("/api/emergency-device/", params={"site_id": "x"}, headers=user_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_get_device_applies_derived_dates(client, seeded, user_headers):
    resp = await client.get(f"/api/emergency-device/{seeded['device_id']}", headers=user_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["expire_date"] == "2025-02-28"
    assert data["next_inspection_date"] == "2024-04-01"


@pytest.mark.asyncio
async def test_get_missing_device(client, seeded, user_headers):
    resp = await client.get("/api/emergency-device/9999", headers=user_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "Device not found"


@pytest.mark.asyncio
@pytest.mark.parametrize("device_id", ["abc", "1_0", "%205", "1.0", "+"])
async def test_get_device_bad_id(client, seeded, user_headers, device_id):
    resp = await client.get(f"/api/emergency-device/{device_id}", headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid device ID"


@pytest.mark.asyncio
async def test_create_device_redirects(client, seeded, admin_headers):
    resp = await client.post("/api/emergency-device/", data=_form(seeded), headers=admin_headers)
    assert resp.status_code == 302
    assert unquote(resp.headers["location"]) == "/dashboard?message=Device added successfully"

    async with async_session() as s:
        device = await s.scalar(select(EmergencyDevice).where(EmergencyDevice.serial_number == "SN00099"))
    assert device.manufacture_date == date(2023, 5, 1)
    assert device.last_inspection_date is None


@pytest.mark.asyncio
async def test_create_device_validation_error_redirects(client, seeded, admin_headers):
    resp = await client.post(
        "/api/emergency-device/", data=_form(seeded, room_id=""), headers=admin_headers,
    )
    assert resp.status_code == 303
    assert unquote(resp.headers["location"]) == "/dashboard?error=Error validating device: room is required"


@pytest.mark.asyncio
async def test_create_device_future_manufacture_date(client, seeded, admin_headers):
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    resp = await client.post(
        "/api/emergency-device/", data=_form(seeded, manufacture_date=tomorrow), headers=admin_headers,
    )
    assert resp.status_code == 303
    assert "manufacture date cannot be in the future" in unquote(resp.headers["location"])


@pytest.mark.asyncio
async def test_create_device_unknown_room(client, seeded, admin_headers):
    resp = await client.post(
        "/api/emergency-device/", data=_form(seeded, room_id="9999"), headers=admin_headers,
    )
    assert resp.status_code == 303
    assert "room does not exist" in unquote(resp.headers["location"])


@pytest.mark.asyncio
async def test_create_device_forbidden_for_user(client, seeded, user_headers):
    resp = await client.post("/api/emergency-device/", data=_form(seeded), headers=user_headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_update_device(client, seeded, admin_headers):
    resp = await client.put(
        f"/api/emergency-device/{seeded['device_id']}", json=_json(seeded), headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "message": "Device updated successfully",
        "redirectURL": "/dashboard?message=Device updated successfully",
    }

    resp = await client.get(f"/api/emergency-device/{seeded['device_id']}", headers=admin_headers)
    data = resp.json()
    assert data["serial_number"] == "SN00001-B"
    assert data["extinguisher_type_id"] is None
    assert data["status"] == "Inactive"
    # Maintenue par les inspections / Maintained by inspections
    assert data["last_inspection_date"] == "2024-01-01"


@pytest.mark.asyncio
async def test_update_device_validation_error(client, seeded, admin_headers):
    resp = await client.put(
        f"/api/emergency-device/{seeded['device_id']}",
        json=_json(seeded, size="x" * 51),
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Error validating device: size is too long, maximum 50 characters",
        "redirectURL": "/dashboard?error=size is too long, maximum 50 characters",
    }


@pytest.mark.asyncio
async def test_update_device_null_fields_count_as_empty(client, seeded, admin_headers):
    resp = await client.put(
        f"/api/emergency-device/{seeded['device_id']}",
        json=_json(seeded, extinguisher_type_id=None, description=None),
        headers=admin_headers,
    )
    assert resp.status_code == 200

    resp = await client.get(f"/api/emergency-device/{seeded['device_id']}", headers=admin_headers)
    assert resp.json()["extinguisher_type_id"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["", "/status"])
async def test_update_unreadable_body(client, seeded, admin_headers, path):
    resp = await client.put(
        f"/api/emergency-device/{seeded['device_id']}{path}",
        content=b"{not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Invalid request body",
        "redirectURL": "/dashboard?error=Invalid request body",
    }


@pytest.mark.asyncio
async def test_update_mistyped_body(client, seeded, admin_headers):
    resp = await client.put(
        f"/api/emergency-device/{seeded['device_id']}", json=_json(seeded, room_id=[1]), headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request body"

    # Les autres ressources gardent la reponse 422 / Other resources keep the 422 response
    resp = await client.post("/api/emergency-device-type/", json={"name": [1]}, headers=admin_headers)
    assert resp.status_code == 422

@pytest.mark.asyncio
async def test_update_missing_device(client, seeded, admin_headers):
    resp = await client.put("/api/emergency-device/9999", json=_json(seeded), headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_device(client, seeded, admin_headers):
    resp = await client.delete(f"/api/emergency-device/{seeded['device_id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Device deleted successfully"

    resp = await client.delete(f"/api/emergency-device/{seeded['device_id']}", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_device_with_inspections_rejected(client, seeded, admin_headers):
    async with async_session() as s:
        s.add(Inspection(
            device_id=seeded["device_id"], user_id=seeded["user_id"],
            inspection_date=date(2024, 1, 1), inspection_status="Passed",
        ))
        await s.commit()

    resp = await client.delete(f"/api/emergency-device/{seeded['device_id']}", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Error deleting device"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["Inspection Due", "Expired"])
async def test_status_override_accepted(client, seeded, admin_headers, status):
    resp = await client.put(
        f"/api/emergency-device/{seeded['device_id']}/status", json={"status": status}, headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"message": "Device status updated successfully"}

    async with async_session() as s:
        device = await s.get(EmergencyDevice, seeded["device_id"])
    assert device.status == status


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, error",
    [
        ("", "Status is required"),
        (None, "Status is required"),
        ("Active", "Invalid status"),
        ("Inspection Failed", "Invalid status"),
    ],
)
async def test_status_override_rejected(client, seeded, admin_headers, status, error):
    resp = await client.put(
        f"/api/emergency-device/{seeded['device_id']}/status", json={"status": status}, headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == error

    async with async_session() as s:
        device = await s.get(EmergencyDevice, seeded["device_id"])
    assert device.status == "Active"


@pytest.mark.asyncio
async def test_status_override_missing_device(client, seeded, admin_headers):
    resp = await client.put(
        "/api/emergency-device/9999/status", json={"status": "Expired"}, headers=admin_headers,
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "Device not found"


@pytest.mark.asyncio
async def test_database_error_returns_error_result(client, seeded, user_headers, monkeypatch):
    async def broken(self, **filters):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(DeviceRepository, "get_all", broken)
    resp = await client.get("/api/emergency-device/", headers=user_headers)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Database error", "redirectURL": "/dashboard?error=Database error"}
