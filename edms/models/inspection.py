"""Modele inspection appareil / Device inspection model.

Une inspection est immuable une fois creee. Son insertion met a jour le
statut de l'appareil (voir services.status_engine).
"""

import enum
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edms.database import Base


class InspectionOutcome(str, enum.Enum):
    """Resultat d'inspection / Inspection outcome."""
    PASSED = "Passed"
    FAILED = "Failed"


class Inspection(Base):
    __tablename__ = "inspections"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    device_id: Mapped[int] = mapped_column(ForeignKey("emergency_devices.id"), nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    inspection_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Points de controle / Checklist (NULL = non renseigne)
    is_conspicuous: Mapped[bool | None] = mapped_column(Boolean)
    is_accessible: Mapped[bool | None] = mapped_column(Boolean)
    is_assigned_location: Mapped[bool | None] = mapped_column(Boolean)
    is_sign_visible: Mapped[bool | None] = mapped_column(Boolean)
    is_anti_tamper_device_intact: Mapped[bool | None] = mapped_column(Boolean)
    is_support_bracket_secure: Mapped[bool | None] = mapped_column(Boolean)
    are_operating_instructions_clear: Mapped[bool | None] = mapped_column(Boolean)
    is_maintenance_tag_attached: Mapped[bool | None] = mapped_column(Boolean)
    is_no_external_damage: Mapped[bool | None] = mapped_column(Boolean)
    is_replaced: Mapped[bool | None] = mapped_column(Boolean)
    are_maintenance_records_complete: Mapped[bool | None] = mapped_column(Boolean)
    work_order_required: Mapped[bool | None] = mapped_column(Boolean)

    inspection_status: Mapped[str] = mapped_column(String(20), nullable=False)  # Passed, Failed
    notes: Mapped[str | None] = mapped_column(Text)

    # Relations
    device: Mapped["EmergencyDevice"] = relationship(back_populates="inspections")
    inspector: Mapped["User"] = relationship(lazy="joined")

    def __repr__(self) -> str:
        return f"<Inspection {self.id} - device {self.device_id} - {self.inspection_status}>"
