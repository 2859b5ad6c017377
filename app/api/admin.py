"""Admin API: moderation queues, status transitions, site stats."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import admin_building_filters, get_db, require_admin
from app.models import ModerationStatus
from app.schemas import AdminStats, BuildingFilters, BuildingRead, BuildingWithRatings, PaginatedBuildings, ReviewRead
from app.services import listing, moderation
from app.services.auth import AuthContext

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats", response_model=AdminStats)
async def get_stats(
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await moderation.get_admin_stats(db)


# ── Buildings ─────────────────────────────────────────────

@router.get("/buildings", response_model=PaginatedBuildings)
async def list_buildings_by_status(
    auth: AuthContext = Depends(require_admin),
    filters: BuildingFilters = Depends(admin_building_filters),
    db: AsyncSession = Depends(get_db),
):
    return await listing.list_buildings(db, filters)


@router.get("/buildings/pending", response_model=list[BuildingRead])
async def list_pending_buildings(
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await moderation.list_pending(db, "building")


@router.get("/buildings/{building_id}", response_model=BuildingWithRatings)
async def get_building(
    building_id: str,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await listing.get_building(db, building_id, include_unmoderated=True)


@router.post("/buildings/{building_id}/approve", response_model=BuildingRead)
async def approve_building(
    building_id: str,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await moderation.set_building_status(db, building_id, ModerationStatus.APPROVED)


@router.post("/buildings/{building_id}/deny", response_model=BuildingRead)
async def deny_building(
    building_id: str,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await moderation.set_building_status(db, building_id, ModerationStatus.DENIED)


# ── Reviews ───────────────────────────────────────────────

@router.get("/reviews/pending", response_model=list[ReviewRead])
async def list_pending_reviews(
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await moderation.list_pending(db, "review")


@router.post("/reviews/{review_id}/approve", response_model=ReviewRead)
async def approve_review(
    review_id: str,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await moderation.set_review_status(db, review_id, ModerationStatus.APPROVED)


@router.post("/reviews/{review_id}/deny", response_model=ReviewRead)
async def deny_review(
    review_id: str,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await moderation.set_review_status(db, review_id, ModerationStatus.DENIED)
