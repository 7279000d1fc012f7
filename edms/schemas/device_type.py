"""Schémas types d'appareil / Device type schemas."""

from pydantic import BaseModel, ConfigDict, Field


class DeviceTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)


class DeviceTypeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)


class DeviceTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
