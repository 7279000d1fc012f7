"""Schémas Site / Site schemas."""

from pydantic import BaseModel, ConfigDict


class SiteRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    address: str
    map_image_path: str | None = None
