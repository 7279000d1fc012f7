"""Schemas appareil d'urgence / Emergency device schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator


class DeviceForm(BaseModel):
    """Saisie brute (JSON) validee par services.device_validator / Raw input."""
    model_config = ConfigDict(coerce_numbers_to_str=True)
    room_id: str = ""
    emergency_device_type_id: str = ""
    extinguisher_type_id: str = ""
    serial_number: str = ""
    manufacture_date: str = ""
    size: str = ""
    description: str = ""
    status: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        # null vaut champ vide / null counts as an empty field
        return "" if v is None else v


class DeviceStatusUpdate(BaseModel):
    status: str = ""

    @field_validator("status", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return "" if v is None else v


class DeviceRead(BaseModel):
    id: int
    emergency_device_type_id: int
    emergency_device_type_name: str
    extinguisher_type_id: int | None = None
    extinguisher_type_name: str | None = None
    room_id: int
    room_code: str
    building_id: int
    building_code: str
    site_id: int
    site_name: str
    serial_number: str | None = None
    manufacture_date: date | None = None
    last_inspection_date: date | None = None
    description: str | None = None
    size: str | None = None
    status: str | None = None
    # Derives (jamais stockes) / Derived (never stored)
    expire_date: date | None = None
    next_inspection_date: date | None = None
