"""Modèle Salle / Room model."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edms.database import Base


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (UniqueConstraint("building_id", "code", name="uq_room_building_code"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    building_id: Mapped[int] = mapped_column(ForeignKey("buildings.id"), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)

    # Relations
    building: Mapped["Building"] = relationship(back_populates="rooms", lazy="joined")
    devices: Mapped[list["EmergencyDevice"]] = relationship(back_populates="room", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Room {self.code}>"
