"""
Routes appareils d'urgence / Emergency device API routes.

Les lectures sont ouvertes a tout utilisateur connecte, les mutations sont
reservees aux administrateurs. Le formulaire de creation du tableau de bord
recoit une redirection, les autres mutations un corps JSON avec redirectURL.
"""

import logging

from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from edms.database import get_db
from edms.models.device import MANUAL_STATUSES
from edms.models.user import User
from edms.schemas.device import DeviceForm, DeviceRead, DeviceStatusUpdate
from edms.services.device_repository import (
    DeviceInUseError,
    DeviceNotFoundError,
    DeviceReferenceError,
    DeviceRepository,
)
from edms.services.device_validator import DeviceValidationError, parse_int, validate_device
from edms.api.deps import get_current_user, require_admin
from edms.api.responses import ActionFailed, failure, redirect_error, redirect_message, success

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_device_id(device_id: str) -> int:
    """Identifiant d'appareil du chemin / Device id from the path (400 if not an integer)."""
    parsed = parse_int(device_id)
    if parsed is None:
        raise failure(400, "Invalid device ID")
    return parsed


def _optional_int(value: str | None, label: str) -> int | None:
    if value is None or value == "":
        return None
    parsed = parse_int(value)
    if parsed is None:
        raise ActionFailed(400, f"Invalid {label}")
    return parsed


@router.get("/", response_model=list[DeviceRead])
async def list_devices(
    site_id: str | None = None,
    building_code: str | None = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les appareils, filtres site / batiment / List devices, filtered by site and building."""
    return await DeviceRepository(db).get_all(
        site_id=_optional_int(site_id, "site ID"),
        building_code=building_code or None,
    )


@router.get("/{device_id}", response_model=DeviceRead)
async def get_device(
    device_id: int = Depends(parse_device_id),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        return await DeviceRepository(db).get_by_id(device_id)
    except DeviceNotFoundError:
        raise failure(404, "Device not found") from None


@router.post("/")
async def create_device(
    room_id: str = Form(""),
    emergency_device_type: str = Form(""),
    extinguisher_type: str = Form(""),
    serial_number: str = Form(""),
    manufacture_date: str = Form(""),
    size: str = Form(""),
    description: str = Form(""),
    status: str = Form(""),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
) -> RedirectResponse:
    """Creer un appareil depuis le formulaire / Create a device from the dashboard form."""
    try:
        data = validate_device(
            room_id, emergency_device_type, extinguisher_type, serial_number,
            manufacture_date, size, description, status,
        )
    except DeviceValidationError as exc:
        logger.info("Error validating device: %s", exc)
        return redirect_error("/dashboard", f"Error validating device: {exc}")

    try:
        device = await DeviceRepository(db).add(data)
    except DeviceReferenceError as exc:
        logger.info("Error adding device: %s", exc)
        return redirect_error("/dashboard", f"Error adding device: {exc}")

    logger.info("Device %s added by %s", device.id, user.username)
    return redirect_message("/dashboard", "Device added successfully")


@router.put("/{device_id}")
async def update_device(
    data: DeviceForm,
    device_id: int = Depends(parse_device_id),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    try:
        device_input = validate_device(
            data.room_id, data.emergency_device_type_id, data.extinguisher_type_id,
            data.serial_number, data.manufacture_date, data.size, data.description, data.status,
        )
    except DeviceValidationError as exc:
        raise failure(400, f"Error validating device: {exc}", detail=str(exc)) from None

    try:
        await DeviceRepository(db).update(device_id, device_input)
    except DeviceNotFoundError:
        raise failure(404, "Device not found") from None
    except DeviceReferenceError as exc:
        raise failure(400, f"Error updating device: {exc}", detail=str(exc)) from None

    logger.info("Device %s updated by %s", device_id, user.username)
    return success("Device updated successfully")


@router.delete("/{device_id}")
async def delete_device(
    device_id: int = Depends(parse_device_id),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    try:
        await DeviceRepository(db).delete(device_id)
    except DeviceNotFoundError:
        raise failure(404, "Device not found") from None
    except DeviceInUseError as exc:
        raise failure(400, "Error deleting device", detail=f"Error deleting device: {exc}") from None

    logger.info("Device %s deleted by %s", device_id, user.username)
    return success("Device deleted successfully")


@router.put("/{device_id}/status")
async def update_device_status(
    data: DeviceStatusUpdate,
    device_id: int = Depends(parse_device_id),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Forcer le statut d'un appareil / Manual status override.

    Seuls "Inspection Due" et "Expired" sont acceptes ; "Active" et
    "Inspection Failed" ne viennent que des inspections.
    """
    repo = DeviceRepository(db)
    try:
        await repo.get_by_id(device_id)
    except DeviceNotFoundError:
        raise failure(404, "Device not found") from None

    if data.status == "":
        raise failure(400, "Status is required")
    if data.status not in MANUAL_STATUSES:
        raise failure(400, "Invalid status")

    await repo.update_status(device_id, data.status)
    logger.info("Device %s status set to %r by %s", device_id, data.status, user.username)
    return success("Device status updated successfully", page=None)
