from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import building_filters, get_db, require_auth
from app.schemas import (
    BuildingCreate, BuildingFilters, BuildingRead, BuildingSuggestion,
    BuildingWithRatings, PaginatedBuildings,
)
from app.services import listing, moderation
from app.services.auth import AuthContext

router = APIRouter(prefix="/api/buildings", tags=["buildings"])


@router.get("", response_model=PaginatedBuildings)
async def list_buildings(
    filters: BuildingFilters = Depends(building_filters),
    db: AsyncSession = Depends(get_db),
):
    return await listing.list_buildings(db, filters)


@router.get("/autocomplete", response_model=list[BuildingSuggestion])
async def autocomplete(
    request: Request,
    q: str = Query(default=""),
    db: AsyncSession = Depends(get_db),
):
    cfg = request.app.state.settings.listing
    return await listing.autocomplete(
        db, q, limit=cfg.autocomplete_limit, min_chars=cfg.autocomplete_min_chars,
    )


@router.get("/{building_id}", response_model=BuildingWithRatings)
async def get_building(
    building_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await listing.get_building(db, building_id)


@router.post("", response_model=BuildingRead, status_code=201)
async def create_building(
    body: BuildingCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await moderation.create_building(db, body, created_by=auth.user_id)
