from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, ModeratedMixin, ULIDMixin

NEIGHBORHOODS: tuple[str, ...] = (
    "Manhattan - Upper East Side",
    "Manhattan - Upper West Side",
    "Manhattan - Midtown",
    "Manhattan - Chelsea",
    "Manhattan - Greenwich Village",
    "Manhattan - SoHo",
    "Manhattan - Tribeca",
    "Manhattan - Financial District",
    "Manhattan - Harlem",
    "Manhattan - East Village",
    "Manhattan - Lower East Side",
    "Brooklyn - Williamsburg",
    "Brooklyn - DUMBO",
    "Brooklyn - Brooklyn Heights",
    "Brooklyn - Park Slope",
    "Brooklyn - Bushwick",
    "Brooklyn - Bedford-Stuyvesant",
    "Brooklyn - Crown Heights",
    "Brooklyn - Greenpoint",
    "Queens - Astoria",
    "Queens - Long Island City",
    "Queens - Flushing",
    "Queens - Jackson Heights",
    "Bronx - Riverdale",
    "Bronx - Fordham",
    "Staten Island - St. George",
)

BUILDING_TYPES: tuple[str, ...] = (
    "High-rise",
    "Mid-rise",
    "Walk-up",
    "Brownstone",
    "Townhouse",
    "Loft",
    "Co-op",
    "Condo",
)


class Building(Base, ULIDMixin, ModeratedMixin):
    __tablename__ = "buildings"

    name: Mapped[str] = mapped_column(String(255))
    address: Mapped[str] = mapped_column(String(500))
    city: Mapped[str] = mapped_column(String(100), default="New York")
    zip_code: Mapped[str] = mapped_column(String(5))
    neighborhood: Mapped[str | None] = mapped_column(String(100), nullable=True)
    building_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    landlord_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(26), nullable=True)

    reviews = relationship("Review", back_populates="building", lazy="raise")
