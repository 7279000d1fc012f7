"""Modèle appareil d'urgence / Emergency device model.

Le statut est une chaine libre (50 car. max) mais les valeurs usuelles sont
celles de DeviceStatus. Les dates d'expiration et de prochaine inspection
sont calculees a la lecture, jamais stockees.
"""

import enum
from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edms.database import Base


class DeviceStatus(str, enum.Enum):
    """Statuts d'appareil / Device statuses."""
    ACTIVE = "Active"
    INSPECTION_FAILED = "Inspection Failed"
    INSPECTION_DUE = "Inspection Due"
    EXPIRED = "Expired"
    INACTIVE = "Inactive"


# Statuts positionnables manuellement / Statuses allowed for manual override
MANUAL_STATUSES = frozenset({DeviceStatus.INSPECTION_DUE.value, DeviceStatus.EXPIRED.value})


class EmergencyDevice(Base):
    __tablename__ = "emergency_devices"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    emergency_device_type_id: Mapped[int] = mapped_column(ForeignKey("emergency_device_types.id"), nullable=False)
    extinguisher_type_id: Mapped[int | None] = mapped_column(ForeignKey("extinguisher_types.id"))
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id"), nullable=False)
    serial_number: Mapped[str | None] = mapped_column(String(50))
    manufacture_date: Mapped[date | None] = mapped_column(Date)
    last_inspection_date: Mapped[date | None] = mapped_column(Date)  # maintenu par les inspections
    description: Mapped[str | None] = mapped_column(String(255))
    size: Mapped[str | None] = mapped_column(String(50))
    status: Mapped[str | None] = mapped_column(String(50))

    # Relations
    device_type: Mapped["EmergencyDeviceType"] = relationship(lazy="joined")
    extinguisher_type: Mapped["ExtinguisherType | None"] = relationship(lazy="joined")
    room: Mapped["Room"] = relationship(back_populates="devices", lazy="joined")
    inspections: Mapped[list["Inspection"]] = relationship(back_populates="device", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<EmergencyDevice {self.id} - {self.serial_number or 'no serial'}>"
