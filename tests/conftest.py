"""Fixtures de test / Test fixtures.

L'environnement est fixe avant tout import de `edms` : la configuration est
lue a l'import.
"""

import os
import tempfile
from datetime import date

_TMP_DIR = tempfile.mkdtemp(prefix="edms-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/test.db"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["ADMIN_PASSWORD"] = "AdminPass1!"
os.environ["RATE_LIMIT_LOGIN"] = "1000/minute"
os.environ["RATE_LIMIT_REGISTER"] = "1000/minute"
os.environ["STATIC_DIR"] = _TMP_DIR
os.environ["SITE_MAPS_DIR"] = os.path.join(_TMP_DIR, "site_maps")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from edms.database import Base, async_session, engine  # noqa: E402
from edms.main import app  # noqa: E402
from edms.models import (  # noqa: E402
    Building,
    EmergencyDevice,
    EmergencyDeviceType,
    ExtinguisherType,
    Room,
    Site,
    User,
)
from edms.utils.auth import create_access_token, hash_password  # noqa: E402


@pytest.fixture
async def database():
    """Schema neuf pour chaque test / Fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    app.dependency_overrides.clear()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(database):
    async with async_session() as s:
        yield s


@pytest.fixture
async def seeded(session):
    """Hierarchie minimale : 1 site, 1 batiment, 1 salle, 1 appareil / Minimal hierarchy."""
    admin = User(
        username="admin", email="admin@example.com", hashed_password=hash_password("AdminPass1!"),
        role="Admin", is_default_admin=True,
    )
    user = User(
        username="inspector", email="inspector@example.com", hashed_password=hash_password("Password1!"),
        role="User",
    )
    site = Site(name="Main Campus", address="1 Test Street")
    building = Building(site=site, code="A")
    room = Room(building=building, code="A1")
    device_type = EmergencyDeviceType(name="Fire Extinguisher")
    co2 = ExtinguisherType(name="CO2")
    device = EmergencyDevice(
        room=room, device_type=device_type, extinguisher_type=co2,
        serial_number="SN00001", manufacture_date=date(2020, 2, 29),
        last_inspection_date=date(2024, 1, 1), status="Active", size="5kg",
        description="Lobby extinguisher",
    )
    session.add_all([admin, user, device])
    await session.commit()
    return {
        "admin_id": admin.id,
        "user_id": user.id,
        "site_id": site.id,
        "building_id": building.id,
        "room_id": room.id,
        "device_type_id": device_type.id,
        "extinguisher_type_id": co2.id,
        "device_id": device.id,
    }


@pytest.fixture
def admin_headers(seeded):
    token = create_access_token(seeded["admin_id"], "admin", "Admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(seeded):
    token = create_access_token(seeded["user_id"], "inspector", "User")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(database):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
