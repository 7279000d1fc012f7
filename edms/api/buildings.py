"""Routes Bâtiments / Building API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edms.database import get_db
from edms.models.building import Building
from edms.models.room import Room
from edms.models.site import Site
from edms.models.user import User
from edms.schemas.building import BuildingCreate, BuildingRead, BuildingUpdate
from edms.api.deps import get_current_user, require_admin

router = APIRouter()


def _to_read(building: Building) -> BuildingRead:
    return BuildingRead(
        id=building.id,
        site_id=building.site_id,
        code=building.code,
        site_name=building.site.name if building.site else None,
    )


async def _check_site_and_code(db: AsyncSession, site_id: int, code: str, exclude_id: int | None = None) -> None:
    """Site existant, code unique dans le site / Site exists, code unique within it."""
    if await db.get(Site, site_id) is None:
        raise HTTPException(status_code=400, detail="Site does not exist")
    query = select(Building.id).where(Building.site_id == site_id, Building.code == code)
    if exclude_id is not None:
        query = query.where(Building.id != exclude_id)
    if await db.scalar(query) is not None:
        raise HTTPException(status_code=409, detail="Building code already exists for this site")


@router.get("/", response_model=list[BuildingRead])
async def list_buildings(
    site_id: int | None = Query(None, alias="siteId"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les bâtiments, filtre par site / List buildings, optionally filtered by site."""
    query = select(Building).order_by(Building.code)
    if site_id is not None:
        query = query.where(Building.site_id == site_id)
    result = await db.execute(query)
    return [_to_read(b) for b in result.scalars().all()]


@router.get("/{building_id}", response_model=BuildingRead)
async def get_building(
    building_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    building = await db.get(Building, building_id)
    if not building:
        raise HTTPException(status_code=404, detail="Building not found")
    return _to_read(building)


@router.post("/", response_model=BuildingRead, status_code=201)
async def create_building(
    data: BuildingCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    await _check_site_and_code(db, data.site_id, data.code)
    building = Building(**data.model_dump())
    db.add(building)
    await db.flush()
    await db.refresh(building)
    return _to_read(building)


@router.put("/{building_id}", response_model=BuildingRead)
async def update_building(
    building_id: int,
    data: BuildingUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    building = await db.get(Building, building_id)
    if not building:
        raise HTTPException(status_code=404, detail="Building not found")
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    await _check_site_and_code(
        db, changes.get("site_id", building.site_id), changes.get("code", building.code), exclude_id=building.id,
    )
    for key, value in changes.items():
        setattr(building, key, value)
    await db.flush()
    await db.refresh(building)
    return _to_read(building)


@router.delete("/{building_id}", status_code=204)
async def delete_building(
    building_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Supprimer un bâtiment vide / Delete a building with no rooms."""
    building = await db.get(Building, building_id)
    if not building:
        raise HTTPException(status_code=404, detail="Building not found")
    rooms = await db.scalar(select(func.count(Room.id)).where(Room.building_id == building_id))
    if rooms:
        raise HTTPException(status_code=400, detail="Cannot delete building with associated rooms")
    await db.delete(building)
