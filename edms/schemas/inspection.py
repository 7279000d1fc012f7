"""Schemas inspection appareil / Device inspection schemas."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field


class InspectionCreate(BaseModel):
    """Nouvelle inspection (l'inspecteur est l'utilisateur courant) / New inspection."""
    device_id: int
    inspection_date: date
    is_conspicuous: bool | None = None
    is_accessible: bool | None = None
    is_assigned_location: bool | None = None
    is_sign_visible: bool | None = None
    is_anti_tamper_device_intact: bool | None = None
    is_support_bracket_secure: bool | None = None
    are_operating_instructions_clear: bool | None = None
    is_maintenance_tag_attached: bool | None = None
    is_no_external_damage: bool | None = None
    is_replaced: bool | None = None
    are_maintenance_records_complete: bool | None = None
    work_order_required: bool | None = None
    inspection_status: Literal["Passed", "Failed"]
    notes: str | None = Field(default=None, max_length=2000)


class InspectionRead(BaseModel):
    id: int
    device_id: int
    user_id: int
    inspector_username: str | None = None
    inspection_date: date
    created_at: datetime | None = None
    is_conspicuous: bool | None = None
    is_accessible: bool | None = None
    is_assigned_location: bool | None = None
    is_sign_visible: bool | None = None
    is_anti_tamper_device_intact: bool | None = None
    is_support_bracket_secure: bool | None = None
    are_operating_instructions_clear: bool | None = None
    is_maintenance_tag_attached: bool | None = None
    is_no_external_damage: bool | None = None
    is_replaced: bool | None = None
    are_maintenance_records_complete: bool | None = None
    work_order_required: bool | None = None
    inspection_status: str
    notes: str | None = None
    # Extra (rempli par l'API) / Extra (populated by API)
    device_status: str | None = None

    model_config = {"from_attributes": True}
