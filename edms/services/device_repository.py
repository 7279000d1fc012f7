"""
Acces aux appareils d'urgence / Emergency device data access.

Toutes les lectures renvoient le contexte complet (type, salle, batiment,
site) et les dates derivees, que ce soit en liste ou a l'unite.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edms.models.building import Building
from edms.models.device import EmergencyDevice
from edms.models.device_type import EmergencyDeviceType, ExtinguisherType
from edms.models.inspection import Inspection
from edms.models.room import Room
from edms.schemas.device import DeviceRead
from edms.services.device_dates import DeviceDatesService
from edms.services.device_validator import DeviceInput


class DeviceNotFoundError(LookupError):
    """Appareil introuvable / Device does not exist."""

    def __init__(self, device_id: int):
        self.device_id = device_id
        super().__init__(f"Device {device_id} not found")


class DeviceReferenceError(ValueError):
    """Salle ou type reference inexistant / Referenced room or type does not exist."""


class DeviceInUseError(ValueError):
    """Appareil encore reference par des inspections / Device still has inspections."""


def device_to_read(device: EmergencyDevice) -> DeviceRead:
    """Convertir appareil ORM en schema Read / Convert ORM to Read schema."""
    room = device.room
    building = room.building
    return DeviceRead(
        id=device.id,
        emergency_device_type_id=device.emergency_device_type_id,
        emergency_device_type_name=device.device_type.name,
        extinguisher_type_id=device.extinguisher_type_id,
        extinguisher_type_name=device.extinguisher_type.name if device.extinguisher_type else None,
        room_id=room.id,
        room_code=room.code,
        building_id=building.id,
        building_code=building.code,
        site_id=building.site.id,
        site_name=building.site.name,
        serial_number=device.serial_number,
        manufacture_date=device.manufacture_date,
        last_inspection_date=device.last_inspection_date,
        description=device.description,
        size=device.size,
        status=device.status,
        expire_date=DeviceDatesService.expiry_date(device.manufacture_date),
        next_inspection_date=DeviceDatesService.next_inspection_date(device.last_inspection_date),
    )


class DeviceRepository:
    """Persistance des appareils / Device persistence."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @staticmethod
    def _filtered_select(site_id: int | None, building_code: str | None) -> Select:
        query = select(EmergencyDevice).order_by(EmergencyDevice.id)
        if site_id is not None or building_code:
            query = (
                query.join(Room, EmergencyDevice.room_id == Room.id)
                .join(Building, Room.building_id == Building.id)
            )
            if site_id is not None:
                query = query.where(Building.site_id == site_id)
            if building_code:
                query = query.where(Building.code == building_code)
        return query

    async def get_all(self, site_id: int | None = None, building_code: str | None = None) -> list[DeviceRead]:
        """Lister les appareils, filtres optionnels / List devices with optional filters."""
        result = await self.db.execute(self._filtered_select(site_id, building_code))
        return [device_to_read(d) for d in result.scalars().all()]

    async def _get(self, device_id: int) -> EmergencyDevice:
        device = await self.db.get(EmergencyDevice, device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device

    async def get_by_id(self, device_id: int) -> DeviceRead:
        return device_to_read(await self._get(device_id))

    async def _check_references(self, data: DeviceInput) -> None:
        """Verifier l'existence des references / Check referenced rows exist."""
        if await self.db.get(Room, data.room_id) is None:
            raise DeviceReferenceError("room does not exist")
        if await self.db.get(EmergencyDeviceType, data.emergency_device_type_id) is None:
            raise DeviceReferenceError("emergency device type does not exist")
        if data.extinguisher_type_id is not None:
            if await self.db.get(ExtinguisherType, data.extinguisher_type_id) is None:
                raise DeviceReferenceError("extinguisher type does not exist")

    @staticmethod
    def _apply(device: EmergencyDevice, data: DeviceInput) -> None:
        device.room_id = data.room_id
        device.emergency_device_type_id = data.emergency_device_type_id
        device.extinguisher_type_id = data.extinguisher_type_id
        device.serial_number = data.serial_number
        device.manufacture_date = data.manufacture_date
        device.description = data.description
        device.size = data.size
        device.status = data.status

    async def add(self, data: DeviceInput) -> EmergencyDevice:
        await self._check_references(data)
        device = EmergencyDevice()
        self._apply(device, data)
        self.db.add(device)
        await self.db.flush()
        return device

    async def update(self, device_id: int, data: DeviceInput) -> EmergencyDevice:
        """Modifier un appareil / Update a device.

        La date de derniere inspection reste geree par les inspections.
        """
        device = await self._get(device_id)
        await self._check_references(data)
        self._apply(device, data)
        await self.db.flush()
        # Recharger les relations modifiees / Reload changed relationships
        await self.db.refresh(device)
        return device

    async def delete(self, device_id: int) -> None:
        device = await self._get(device_id)
        inspections = await self.db.scalar(
            select(func.count(Inspection.id)).where(Inspection.device_id == device_id)
        )
        if inspections:
            raise DeviceInUseError("cannot delete a device with recorded inspections")
        await self.db.delete(device)
        await self.db.flush()

    async def update_status(self, device_id: int, status: str) -> None:
        device = await self._get(device_id)
        device.status = status
        await self.db.flush()
