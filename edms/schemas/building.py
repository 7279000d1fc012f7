"""Schémas Bâtiment / Building schemas."""

from pydantic import BaseModel, ConfigDict, Field


class BuildingBase(BaseModel):
    site_id: int
    code: str = Field(min_length=1, max_length=50)


class BuildingCreate(BuildingBase):
    pass


class BuildingUpdate(BaseModel):
    site_id: int | None = None
    code: str | None = Field(default=None, min_length=1, max_length=50)


class BuildingRead(BuildingBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    site_name: str | None = None
