from __future__ import annotations

from app.schemas.common import CamelModel


class AdminStats(CamelModel):
    total_users: int
    total_buildings: int
    pending_buildings: int
    total_reviews: int
    pending_reviews: int


class CurrentUser(CamelModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    is_admin: bool = False
