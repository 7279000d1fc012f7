"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que le metadata soit complet.
Import all models here so the metadata is complete.
"""

from edms.models.site import Site
from edms.models.building import Building
from edms.models.room import Room
from edms.models.device_type import EmergencyDeviceType, ExtinguisherType
from edms.models.device import DeviceStatus, EmergencyDevice, MANUAL_STATUSES
from edms.models.inspection import Inspection, InspectionOutcome
from edms.models.user import User, UserRole

__all__ = [
    "Site",
    "Building",
    "Room",
    "EmergencyDeviceType",
    "ExtinguisherType",
    "DeviceStatus",
    "EmergencyDevice",
    "MANUAL_STATUSES",
    "Inspection",
    "InspectionOutcome",
    "User",
    "UserRole",
]
