"""Pydantic request/response schemas."""

from app.schemas.building import (
    BuildingCreate, BuildingRead, BuildingWithRatings, BuildingSuggestion,
    PaginatedBuildings, BuildingFilters,
)
from app.schemas.review import (
    ReviewCreate, ReviewRead, ReviewPhotoRead, ReviewWithDetails, FloorInsight,
)
from app.schemas.admin import AdminStats, CurrentUser

__all__ = [
    "BuildingCreate", "BuildingRead", "BuildingWithRatings", "BuildingSuggestion",
    "PaginatedBuildings", "BuildingFilters",
    "ReviewCreate", "ReviewRead", "ReviewPhotoRead", "ReviewWithDetails", "FloorInsight",
    "AdminStats", "CurrentUser",
]
