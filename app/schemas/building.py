from __future__ import annotations

import re
from typing import Literal

from pydantic import Field, field_validator

from app.models import BUILDING_TYPES, NEIGHBORHOODS, ModerationStatus
from app.schemas.common import CamelModel, UTCDateTime

_ZIP_RE = re.compile(r"^\d{5}$")

ALL = "all"
SortBy = Literal["rating", "reviews", "newest"]


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class BuildingCreate(CamelModel):
    name: str
    address: str
    city: str = "New York"
    zip_code: str
    neighborhood: str | None = None
    building_type: str | None = None
    landlord_name: str | None = None

    @field_validator("name")
    @classmethod
    def _name_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Building name must be at least 2 characters")
        return v

    @field_validator("address")
    @classmethod
    def _address_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 5:
            raise ValueError("Address must be at least 5 characters")
        return v

    @field_validator("city")
    @classmethod
    def _city_default(cls, v: str) -> str:
        return v.strip() or "New York"

    @field_validator("zip_code")
    @classmethod
    def _zip_format(cls, v: str) -> str:
        if not _ZIP_RE.match(v):
            raise ValueError("Must be a valid 5-digit ZIP code")
        return v

    @field_validator("neighborhood", mode="before")
    @classmethod
    def _neighborhood_member(cls, v):
        v = _blank_to_none(v)
        if v is not None and v not in NEIGHBORHOODS:
            raise ValueError("Unknown neighborhood")
        return v

    @field_validator("building_type", mode="before")
    @classmethod
    def _building_type_member(cls, v):
        v = _blank_to_none(v)
        if v is not None and v not in BUILDING_TYPES:
            raise ValueError("Unknown building type")
        return v

    @field_validator("landlord_name", mode="before")
    @classmethod
    def _landlord_blank(cls, v):
        return _blank_to_none(v)


class BuildingRead(CamelModel):
    id: str
    name: str
    address: str
    city: str
    zip_code: str
    neighborhood: str | None = None
    building_type: str | None = None
    landlord_name: str | None = None
    status: ModerationStatus
    created_at: UTCDateTime
    created_by: str | None = None


class BuildingWithRatings(BuildingRead):
    overall_rating: float = 0.0
    review_count: int = 0
    noise_rating: float = 0.0
    cleanliness_rating: float = 0.0
    maintenance_rating: float = 0.0
    safety_rating: float = 0.0
    pest_rating: float = 0.0


class BuildingSuggestion(CamelModel):
    id: str
    name: str
    address: str


class PaginatedBuildings(CamelModel):
    buildings: list[BuildingWithRatings]
    total: int
    has_more: bool


class BuildingFilters(CamelModel):
    """Listing query. ``"all"`` (or nothing) for a category means no filter."""

    q: str | None = None
    neighborhood: str = ALL
    building_type: str = ALL
    sort_by: SortBy = "rating"
    limit: int = Field(default=12, ge=1)
    offset: int = Field(default=0, ge=0)
    status: ModerationStatus = ModerationStatus.APPROVED

    @field_validator("q", mode="before")
    @classmethod
    def _q_blank(cls, v):
        v = _blank_to_none(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("neighborhood", mode="before")
    @classmethod
    def _neighborhood_filter(cls, v):
        v = _blank_to_none(v) or ALL
        if v != ALL and v not in NEIGHBORHOODS:
            raise ValueError("Unknown neighborhood")
        return v

    @field_validator("building_type", mode="before")
    @classmethod
    def _building_type_filter(cls, v):
        v = _blank_to_none(v) or ALL
        if v != ALL and v not in BUILDING_TYPES:
            raise ValueError("Unknown building type")
        return v
