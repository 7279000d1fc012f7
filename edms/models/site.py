"""Modèle Site / Site model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from edms.database import Base


class Site(Base):
    __tablename__ = "sites"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    map_image_path: Mapped[str | None] = mapped_column(String(255))  # URL relative, ex. /static/site_maps/X.png

    # Relations
    buildings: Mapped[list["Building"]] = relationship(back_populates="site", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Site {self.name}>"
