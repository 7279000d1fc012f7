"""Modèle Bâtiment / Building model."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edms.database import Base


class Building(Base):
    __tablename__ = "buildings"
    __table_args__ = (UniqueConstraint("site_id", "code", name="uq_building_site_code"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    site_id: Mapped[int] = mapped_column(ForeignKey("sites.id"), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)

    # Relations
    site: Mapped["Site"] = relationship(back_populates="buildings", lazy="joined")
    rooms: Mapped[list["Room"]] = relationship(back_populates="building", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Building {self.code}>"
