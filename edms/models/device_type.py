"""Modèles types d'appareil / Device type models."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from edms.database import Base


class EmergencyDeviceType(Base):
    """Type d'appareil d'urgence (extincteur, defibrillateur...) / Emergency device type."""

    __tablename__ = "emergency_device_types"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<EmergencyDeviceType {self.name}>"


class ExtinguisherType(Base):
    """Agent extincteur (CO2, eau, poudre) / Extinguisher agent."""

    __tablename__ = "extinguisher_types"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<ExtinguisherType {self.name}>"
