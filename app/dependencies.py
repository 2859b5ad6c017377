"""FastAPI dependency providers for DB sessions, caller identity and filters."""

from __future__ import annotations

import pydantic
from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import ListingConfig, Settings
from app.errors import ValidationError, first_validation_message
from app.models import ModerationStatus
from app.schemas import BuildingFilters
from app.services.auth import AuthContext, ensure_admin, resolve_token


def _settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(request: Request) -> AsyncSession:
    """Yield a session from the Database the app was built with."""
    async for session in request.app.state.database.session():
        yield session


def _presented_token(request: Request, settings: Settings) -> str | None:
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value:
        return value.strip()
    return None


async def require_auth(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AuthContext:
    """Require a valid session cookie or bearer token. Returns AuthContext."""
    return await resolve_token(db, _presented_token(request, _settings(request)))


async def require_admin(auth: AuthContext = Depends(require_auth)) -> AuthContext:
    return ensure_admin(auth)


def _page_limit(listing: ListingConfig, limit: int | None, default: int) -> int:
    if limit is None:
        return default
    if limit > listing.max_page_size:
        raise ValidationError(f"limit must be at most {listing.max_page_size}")
    return limit


def _validated_filters(params: dict) -> BuildingFilters:
    # Validate by wire name so error locations read "sortBy", not "sort_by"
    try:
        return BuildingFilters.model_validate(params)
    except pydantic.ValidationError as e:
        raise ValidationError(first_validation_message(e.errors())) from e


def building_filters(
    request: Request,
    q: str | None = Query(default=None),
    neighborhood: str = Query(default="all"),
    building_type: str = Query(default="all", alias="buildingType"),
    sort_by: str = Query(default="rating", alias="sortBy"),
    limit: int | None = Query(default=None),
    offset: int = Query(default=0),
) -> BuildingFilters:
    """Public listing filters. Out-of-range paging is rejected, not clamped."""
    listing = _settings(request).listing
    return _validated_filters({
        "q": q, "neighborhood": neighborhood, "buildingType": building_type,
        "sortBy": sort_by, "limit": _page_limit(listing, limit, listing.default_page_size),
        "offset": offset,
    })


def admin_building_filters(
    request: Request,
    status: str = Query(default=ModerationStatus.PENDING.value),
    sort_by: str = Query(default="newest", alias="sortBy"),
    limit: int | None = Query(default=None),
    offset: int = Query(default=0),
) -> BuildingFilters:
    """Moderation listing by status; pages default to the largest allowed size."""
    listing = _settings(request).listing
    return _validated_filters({
        "status": status, "sortBy": sort_by,
        "limit": _page_limit(listing, limit, listing.max_page_size), "offset": offset,
    })
