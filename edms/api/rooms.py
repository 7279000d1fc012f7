"""Routes Salles / Room API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edms.database import get_db
from edms.models.building import Building
from edms.models.device import EmergencyDevice
from edms.models.room import Room
from edms.models.user import User
from edms.schemas.room import RoomCreate, RoomRead, RoomUpdate
from edms.api.deps import get_current_user, require_admin

router = APIRouter()


def _to_read(room: Room) -> RoomRead:
    building = room.building
    return RoomRead(
        id=room.id,
        building_id=room.building_id,
        code=room.code,
        building_code=building.code,
        site_id=building.site_id,
        site_name=building.site.name,
    )


async def _check_building_and_code(db: AsyncSession, building_id: int, code: str, exclude_id: int | None = None) -> None:
    if await db.get(Building, building_id) is None:
        raise HTTPException(status_code=400, detail="Building does not exist")
    query = select(Room.id).where(Room.building_id == building_id, Room.code == code)
    if exclude_id is not None:
        query = query.where(Room.id != exclude_id)
    if await db.scalar(query) is not None:
        raise HTTPException(status_code=409, detail="Room code already exists for this building")


@router.get("/", response_model=list[RoomRead])
async def list_rooms(
    building_id: int | None = Query(None, alias="buildingId"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les salles, filtre par bâtiment / List rooms, optionally filtered by building."""
    query = select(Room).order_by(Room.code)
    if building_id is not None:
        query = query.where(Room.building_id == building_id)
    result = await db.execute(query)
    return [_to_read(r) for r in result.scalars().all()]


@router.get("/{room_id}", response_model=RoomRead)
async def get_room(
    room_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    room = await db.get(Room, room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return _to_read(room)


@router.post("/", response_model=RoomRead, status_code=201)
async def create_room(
    data: RoomCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    await _check_building_and_code(db, data.building_id, data.code)
    room = Room(**data.model_dump())
    db.add(room)
    await db.flush()
    await db.refresh(room)
    return _to_read(room)


@router.put("/{room_id}", response_model=RoomRead)
async def update_room(
    room_id: int,
    data: RoomUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    room = await db.get(Room, room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    await _check_building_and_code(
        db, changes.get("building_id", room.building_id), changes.get("code", room.code), exclude_id=room.id,
    )
    for key, value in changes.items():
        setattr(room, key, value)
    await db.flush()
    await db.refresh(room)
    return _to_read(room)


@router.delete("/{room_id}", status_code=204)
async def delete_room(
    room_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Supprimer une salle sans appareil / Delete a room with no devices."""
    room = await db.get(Room, room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    devices = await db.scalar(select(func.count(EmergencyDevice.id)).where(EmergencyDevice.room_id == room_id))
    if devices:
        raise HTTPException(status_code=400, detail="Cannot delete room with associated emergency devices")
    await db.delete(room)
