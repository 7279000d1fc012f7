"""Schémas Utilisateur / User schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

Role = Literal["Admin", "User"]


class UserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_]+$")
    email: EmailStr
    password: str = Field(min_length=8, max_length=200)
    role: Role = "User"


class UserUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_]+$")
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8, max_length=200)
    role: Role | None = None


class UserRead(BaseModel):
    id: int
    username: str
    email: str
    role: str
    is_default_admin: bool
    created_at: datetime | None = None
    model_config = {"from_attributes": True}
