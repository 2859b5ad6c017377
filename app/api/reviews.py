from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, require_auth
from app.schemas import FloorInsight, ReviewCreate, ReviewRead, ReviewWithDetails
from app.schemas.review import ReviewSortBy
from app.services import moderation, reviews
from app.services.auth import AuthContext

router = APIRouter(prefix="/api/buildings/{building_id}", tags=["reviews"])


@router.get("/reviews", response_model=list[ReviewWithDetails])
async def list_reviews(
    building_id: str,
    sort_by: ReviewSortBy = Query(default="newest", alias="sortBy"),
    db: AsyncSession = Depends(get_db),
):
    return await reviews.list_reviews_for_building(db, building_id, sort_by)


@router.post("/reviews", response_model=ReviewRead, status_code=201)
async def create_review(
    building_id: str,
    body: ReviewCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await moderation.create_review(db, body, building_id, auth.user_id)


@router.get("/floor-insights", response_model=list[FloorInsight])
async def floor_insights(
    building_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await reviews.floor_insights(db, building_id)
