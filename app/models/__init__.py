"""SQLAlchemy ORM models."""

from app.models.base import Base, ModerationStatus
from app.models.building import Building, NEIGHBORHOODS, BUILDING_TYPES
from app.models.review import Review, CATEGORY_RATINGS
from app.models.review_photo import ReviewPhoto
from app.models.user import User, UserSession

__all__ = [
    "Base", "ModerationStatus",
    "Building", "NEIGHBORHOODS", "BUILDING_TYPES",
    "Review", "CATEGORY_RATINGS", "ReviewPhoto",
    "User", "UserSession",
]
