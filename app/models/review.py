"""Review model: a user's rated account of living in a building."""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, ModeratedMixin, ULIDMixin

CATEGORY_RATINGS: tuple[str, ...] = (
    "noise_rating",
    "cleanliness_rating",
    "maintenance_rating",
    "safety_rating",
    "pest_rating",
)


def _rating_check(column: str) -> CheckConstraint:
    return CheckConstraint(
        f"{column} IS NULL OR ({column} >= 1 AND {column} <= 5)",
        name=f"ck_reviews_{column}_range",
    )


class Review(Base, ULIDMixin, ModeratedMixin):
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("overall_rating >= 1 AND overall_rating <= 5", name="ck_reviews_overall_rating_range"),
        CheckConstraint("floor_number >= 1 AND floor_number <= 100", name="ck_reviews_floor_number_range"),
        *(_rating_check(c) for c in CATEGORY_RATINGS),
    )

    building_id: Mapped[str] = mapped_column(String(26), ForeignKey("buildings.id"), index=True)
    user_id: Mapped[str] = mapped_column(String(26))
    overall_rating: Mapped[int] = mapped_column(Integer)
    floor_number: Mapped[int] = mapped_column(Integer)
    noise_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cleanliness_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    maintenance_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    safety_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pest_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    review_text: Mapped[str] = mapped_column(Text)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, default=True)

    building = relationship("Building", back_populates="reviews", lazy="raise")
    photos = relationship(
        "ReviewPhoto", back_populates="review", lazy="selectin",
        order_by="ReviewPhoto.created_at",
    )
