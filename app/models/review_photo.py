from __future__ import annotations

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, ULIDMixin


class ReviewPhoto(Base, ULIDMixin):
    __tablename__ = "review_photos"

    review_id: Mapped[str] = mapped_column(String(26), ForeignKey("reviews.id"), index=True)
    image_url: Mapped[str] = mapped_column(String(1000))

    review = relationship("Review", back_populates="photos")
