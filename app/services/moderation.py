"""Moderation gate for buildings and reviews.

Both entity types are created ``pending`` and move once, by admin action, to
``approved`` or ``denied``. Moderated rows are terminal: repeating the same
decision is a no-op, reversing it is a conflict.
"""

from __future__ import annotations

import logging
from typing import Literal

from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.errors import ModerationConflictError, NotFoundError, ValidationError
from app.models import Building, ModerationStatus, Review, User
from app.schemas import AdminStats, BuildingCreate, ReviewCreate

logger = logging.getLogger(__name__)

EntityType = Literal["building", "review"]

_DECISIONS = (ModerationStatus.APPROVED, ModerationStatus.DENIED)


async def create_building(db: AsyncSession, data: BuildingCreate, created_by: str) -> Building:
    building = await crud.create_building(db, created_by=created_by, **data.model_dump())
    logger.info("Building %s submitted by %s", building.id, created_by)
    return building


async def create_review(db: AsyncSession, data: ReviewCreate, building_id: str, user_id: str) -> Review:
    building = await crud.get_building(db, building_id)
    if building is None or building.status != ModerationStatus.APPROVED:
        raise NotFoundError("Building not found")

    fields = data.model_dump(exclude={"photo_urls"})
    review = await crud.create_review(
        db, photo_urls=data.photo_urls,
        building_id=building.id, user_id=user_id, **fields,
    )
    logger.info("Review %s submitted for building %s by %s", review.id, building.id, user_id)
    return review


def _check_transition(row: Building | Review, target: ModerationStatus) -> bool:
    """Return True when ``row`` actually needs to change."""
    if target not in _DECISIONS:
        raise ValidationError("Status must be 'approved' or 'denied'")
    if row.status == target:
        return False
    if row.status != ModerationStatus.PENDING:
        raise ModerationConflictError(f"Already {row.status.value}")
    return True


async def set_building_status(db: AsyncSession, building_id: str, status: ModerationStatus) -> Building:
    building = await crud.get_building(db, building_id)
    if building is None:
        raise NotFoundError("Building not found")
    if _check_transition(building, status):
        building = await crud.update_status(db, building, status)
        logger.info("Building %s moderated: %s", building.id, status.value)
    return building


async def set_review_status(db: AsyncSession, review_id: str, status: ModerationStatus) -> Review:
    review = await crud.get_review(db, review_id)
    if review is None:
        raise NotFoundError("Review not found")
    if _check_transition(review, status):
        review = await crud.update_status(db, review, status)
        logger.info("Review %s moderated: %s", review.id, status.value)
    return review


async def list_pending(db: AsyncSession, entity: EntityType) -> list[Building] | list[Review]:
    if entity == "building":
        return await crud.list_buildings_by_status(db, ModerationStatus.PENDING)
    if entity == "review":
        return await crud.list_reviews_by_status(db, ModerationStatus.PENDING)
    raise ValidationError(f"Unknown entity type: {entity}")


async def get_admin_stats(db: AsyncSession) -> AdminStats:
    return AdminStats(
        total_users=await crud.count_rows(db, User),
        total_buildings=await crud.count_rows(db, Building, ModerationStatus.APPROVED),
        pending_buildings=await crud.count_rows(db, Building, ModerationStatus.PENDING),
        total_reviews=await crud.count_rows(db, Review, ModerationStatus.APPROVED),
        pending_reviews=await crud.count_rows(db, Review, ModerationStatus.PENDING),
    )
