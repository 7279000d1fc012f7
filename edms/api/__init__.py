"""Routes API / API routes."""

from fastapi import APIRouter

from edms.api import (
    auth,
    users,
    sites,
    buildings,
    rooms,
    device_types,
    devices,
    inspections,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/user", tags=["users"])
api_router.include_router(sites.router, prefix="/site", tags=["sites"])
api_router.include_router(buildings.router, prefix="/building", tags=["buildings"])
api_router.include_router(rooms.router, prefix="/room", tags=["rooms"])
api_router.include_router(
    device_types.emergency_device_type_router, prefix="/emergency-device-type", tags=["device-types"],
)
api_router.include_router(
    device_types.extinguisher_type_router, prefix="/extinguisher-type", tags=["device-types"],
)
api_router.include_router(devices.router, prefix="/emergency-device", tags=["emergency-devices"])
api_router.include_router(inspections.router, prefix="/inspection", tags=["inspections"])
