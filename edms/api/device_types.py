"""
Routes types d'appareil / Device type API routes.
Deux listes de référence : types d'appareil d'urgence et agents extincteurs.
Two lookup tables: emergency device types and extinguisher agents.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edms.database import get_db
from edms.models.device import EmergencyDevice
from edms.models.device_type import EmergencyDeviceType, ExtinguisherType
from edms.models.user import User
from edms.schemas.device_type import DeviceTypeCreate, DeviceTypeRead, DeviceTypeUpdate
from edms.api.deps import get_current_user, require_admin


def build_type_router(model, device_column, label: str) -> APIRouter:
    """Routeur CRUD pour une table de types / CRUD router for a type table.

    `device_column` est la FK de EmergencyDevice vers cette table ; la
    suppression est refusee tant qu'un appareil la reference.
    """
    router = APIRouter()

    async def _get_or_404(db: AsyncSession, type_id: int):
        item = await db.get(model, type_id)
        if not item:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return item

    async def _check_unique(db: AsyncSession, name: str, exclude_id: int | None = None) -> None:
        query = select(model.id).where(model.name == name)
        if exclude_id is not None:
            query = query.where(model.id != exclude_id)
        if await db.scalar(query) is not None:
            raise HTTPException(status_code=409, detail=f"{label} already exists")

    @router.get("/", response_model=list[DeviceTypeRead])
    async def list_types(
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user),
    ):
        result = await db.execute(select(model).order_by(model.name))
        return result.scalars().all()

    @router.get("/{type_id}", response_model=DeviceTypeRead)
    async def get_type(
        type_id: int,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user),
    ):
        return await _get_or_404(db, type_id)

    @router.post("/", response_model=DeviceTypeRead, status_code=201)
    async def create_type(
        data: DeviceTypeCreate,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(require_admin),
    ):
        await _check_unique(db, data.name)
        item = model(name=data.name)
        db.add(item)
        await db.flush()
        await db.refresh(item)
        return item

    @router.put("/{type_id}", response_model=DeviceTypeRead)
    async def update_type(
        type_id: int,
        data: DeviceTypeUpdate,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(require_admin),
    ):
        item = await _get_or_404(db, type_id)
        if data.name is not None:
            await _check_unique(db, data.name, exclude_id=item.id)
            item.name = data.name
        await db.flush()
        await db.refresh(item)
        return item

    @router.delete("/{type_id}", status_code=204)
    async def delete_type(
        type_id: int,
        db: AsyncSession = Depends(get_db),
        user: User = Depends(require_admin),
    ):
        item = await _get_or_404(db, type_id)
        in_use = await db.scalar(select(func.count(EmergencyDevice.id)).where(device_column == type_id))
        if in_use:
            raise HTTPException(status_code=400, detail=f"Cannot delete {label.lower()} with associated emergency devices")
        await db.delete(item)

    return router


emergency_device_type_router = build_type_router(
    EmergencyDeviceType, EmergencyDevice.emergency_device_type_id, "Emergency device type",
)
extinguisher_type_router = build_type_router(
    ExtinguisherType, EmergencyDevice.extinguisher_type_id, "Extinguisher type",
)
