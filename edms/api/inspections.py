"""
Routes inspections appareils / Device inspection API routes.
Les inspections sont immuables : creation et lecture uniquement.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edms.database import get_db
from edms.models.device import EmergencyDevice
from edms.models.inspection import Inspection
from edms.models.user import User
from edms.schemas.inspection import InspectionCreate, InspectionRead
from edms.services.device_repository import DeviceNotFoundError
from edms.services.status_engine import record_inspection
from edms.api.deps import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


def _inspection_to_read(inspection: Inspection, device_status: str | None = None) -> InspectionRead:
    read = InspectionRead.model_validate(inspection)
    read.inspector_username = inspection.inspector.username if inspection.inspector else None
    read.device_status = device_status
    return read


@router.get("/", response_model=list[InspectionRead])
async def list_inspections(
    device_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Historique des inspections, plus recentes d'abord / Inspection history, newest first."""
    query = select(Inspection).order_by(Inspection.inspection_date.desc(), Inspection.id.desc())
    if device_id is not None:
        query = query.where(Inspection.device_id == device_id)
    result = await db.execute(query)
    return [_inspection_to_read(i) for i in result.scalars().all()]


@router.get("/{inspection_id}", response_model=InspectionRead)
async def get_inspection(
    inspection_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    inspection = await db.get(Inspection, inspection_id)
    if not inspection:
        raise HTTPException(status_code=404, detail="Inspection not found")
    return _inspection_to_read(inspection)


@router.post("/", response_model=InspectionRead, status_code=201)
async def create_inspection(
    data: InspectionCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Enregistrer une inspection / Record an inspection.

    L'inspecteur est l'utilisateur connecte. Le statut de l'appareil est mis
    a jour dans la meme transaction.
    """
    if data.inspection_date > date.today():
        raise HTTPException(status_code=400, detail="Inspection date cannot be in the future")

    inspection = Inspection(**data.model_dump(), user_id=user.id)
    try:
        updated = await record_inspection(db, inspection)
    except DeviceNotFoundError:
        raise HTTPException(status_code=404, detail="Device not found") from None

    await db.refresh(inspection)
    logger.info(
        "Inspection %s recorded by %s for device %s (%s, device %s)",
        inspection.id, user.username, inspection.device_id, inspection.inspection_status,
        "updated" if updated else "unchanged",
    )
    device_status = (await db.get(EmergencyDevice, inspection.device_id)).status
    return _inspection_to_read(inspection, device_status)
