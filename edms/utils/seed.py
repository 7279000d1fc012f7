"""
Seed des donnees de demonstration / Demo data seeding.
Cree les comptes, sites, batiments, salles, types, appareils et inspections
au premier demarrage si aucun utilisateur n'existe.
Creates accounts, sites, buildings, rooms, types, devices and inspections
on first startup if no users exist.
"""

import logging
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edms.config import settings
from edms.models.building import Building
from edms.models.device import DeviceStatus, EmergencyDevice
from edms.models.device_type import EmergencyDeviceType, ExtinguisherType
from edms.models.inspection import Inspection, InspectionOutcome
from edms.models.room import Room
from edms.models.site import Site
from edms.models.user import User, UserRole
from edms.services.status_engine import record_inspection
from edms.utils.auth import hash_password

logger = logging.getLogger(__name__)

DEMO_DATE = date(2024, 1, 1)
DEMO_USER_PASSWORD = "Password1!"

CHECKLIST_FIELDS = (
    "is_conspicuous",
    "is_accessible",
    "is_assigned_location",
    "is_sign_visible",
    "is_anti_tamper_device_intact",
    "is_support_bracket_secure",
    "are_operating_instructions_clear",
    "is_maintenance_tag_attached",
    "is_no_external_damage",
    "is_replaced",
    "are_maintenance_records_complete",
    "work_order_required",
)


def _checklist(*values: bool | None) -> dict:
    return dict(zip(CHECKLIST_FIELDS, values))


async def seed_demo_data(session: AsyncSession) -> bool:
    """Inserer le jeu de demonstration / Insert the demo dataset.

    Retourne False si des utilisateurs existent deja (seed ignore).
    """
    count = await session.scalar(select(func.count(User.id)))
    if count:
        logger.info("%s existing user(s), seed skipped", count)
        return False

    if not settings.ADMIN_PASSWORD:
        raise RuntimeError("ADMIN_PASSWORD must be set to seed the default admin account")

    admin = User(
        username="admin1",
        email="admin@email.com",
        hashed_password=hash_password(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN.value,
        is_default_admin=True,
    )
    user = User(
        username="user12",
        email="user@email.com",
        hashed_password=hash_password(DEMO_USER_PASSWORD),
        role=UserRole.USER.value,
    )
    session.add_all([admin, user])

    taradale = Site(name="EIT Taradale", address="501 Gloucester Street, Taradale, Napier 4112")
    hastings = Site(
        name="EIT Hastings",
        address="416 Heretaunga Street West, Hastings 4122",
        map_image_path=f"{settings.SITE_MAP_URL_PREFIX}EIT_Hastings.png",
    )
    building_a = Building(site=taradale, code="A")
    building_b = Building(site=taradale, code="B")
    building_main = Building(site=hastings, code="Main")
    room_a1 = Room(building=building_a, code="A1")
    room_b1 = Room(building=building_b, code="B1")
    room_main = Room(building=building_main, code="Main Room")

    co2, water, dry = (ExtinguisherType(name=n) for n in ("CO2", "Water", "Dry"))
    fire_extinguisher = EmergencyDeviceType(name="Fire Extinguisher")
    session.add_all([room_a1, room_b1, room_main, co2, water, dry, fire_extinguisher])

    devices = [
        EmergencyDevice(
            room=room_a1, device_type=fire_extinguisher, extinguisher_type=co2,
            serial_number="SN00001", last_inspection_date=DEMO_DATE,
            status=DeviceStatus.ACTIVE.value, description="Test Fire Extinguisher 1",
        ),
        EmergencyDevice(
            room=room_b1, device_type=fire_extinguisher, extinguisher_type=water,
            serial_number="SN00002", last_inspection_date=DEMO_DATE,
            status=DeviceStatus.INSPECTION_FAILED.value, description="Test Fire Extinguisher 2",
        ),
        EmergencyDevice(
            room=room_a1, device_type=fire_extinguisher, extinguisher_type=dry,
            serial_number="SN00003", last_inspection_date=None,
            status=DeviceStatus.INACTIVE.value, description="Test Fire Extinguisher 3",
        ),
        EmergencyDevice(
            room=room_main, device_type=fire_extinguisher, extinguisher_type=co2,
            serial_number="SN00004", last_inspection_date=DEMO_DATE,
            status=DeviceStatus.ACTIVE.value, description="Hastings Main Room Fire Extinguisher",
        ),
    ]
    for device in devices:
        device.manufacture_date = DEMO_DATE
        device.size = "5kg"
    session.add_all(devices)
    await session.flush()

    # Passer par la regle de statut / Go through the status rule
    inspections = [
        (devices[0], InspectionOutcome.PASSED, _checklist(*([True] * 12))),
        (devices[1], InspectionOutcome.FAILED, _checklist(*([True] * 12))),
        (devices[2], InspectionOutcome.FAILED, _checklist(
            True, None, True, None, True, None, None, True, True, None, True, True,
        )),
    ]
    for device, outcome, checklist in inspections:
        await record_inspection(session, Inspection(
            device_id=device.id,
            user_id=admin.id,
            inspection_date=DEMO_DATE,
            inspection_status=outcome.value,
            notes="No notes",
            **checklist,
        ))

    await session.commit()
    logger.info("Demo data seeded: admin1 (default admin) and user12")
    return True
