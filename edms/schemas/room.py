"""Schémas Salle / Room schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RoomBase(BaseModel):
    building_id: int
    code: str = Field(min_length=1, max_length=50)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    building_id: int | None = None
    code: str | None = Field(default=None, min_length=1, max_length=50)


class RoomRead(RoomBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    building_code: str | None = None
    site_id: int | None = None
    site_name: str | None = None
