"""Public review reads: approved reviews with photos and author attribution."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.errors import NotFoundError
from app.models import ModerationStatus, Review, User
from app.schemas import FloorInsight, ReviewPhotoRead, ReviewWithDetails
from app.schemas.review import ReviewSortBy


async def _require_visible_building(db: AsyncSession, building_id: str) -> None:
    building = await crud.get_building(db, building_id)
    if building is None or building.status != ModerationStatus.APPROVED:
        raise NotFoundError("Building not found")


def _display_name(user: User) -> str | None:
    name = f"{user.first_name or ''} {user.last_name or ''}".strip()
    return name or None


def to_public_review(review: Review, author: User | None) -> ReviewWithDetails:
    """Public shape of a review; anonymous reviews never carry the author."""
    user_name = user_profile_image = None
    if not review.is_anonymous and author is not None:
        user_name = _display_name(author)
        user_profile_image = author.profile_image_url or None

    return ReviewWithDetails(
        id=review.id,
        building_id=review.building_id,
        overall_rating=review.overall_rating,
        floor_number=review.floor_number,
        noise_rating=review.noise_rating,
        cleanliness_rating=review.cleanliness_rating,
        maintenance_rating=review.maintenance_rating,
        safety_rating=review.safety_rating,
        pest_rating=review.pest_rating,
        review_text=review.review_text,
        is_anonymous=review.is_anonymous,
        created_at=review.created_at,
        photos=[ReviewPhotoRead.model_validate(p) for p in review.photos],
        user_name=user_name,
        user_profile_image=user_profile_image,
    )


async def list_reviews_for_building(
    db: AsyncSession, building_id: str, sort_by: ReviewSortBy = "newest",
) -> list[ReviewWithDetails]:
    await _require_visible_building(db, building_id)

    if sort_by == "highest":
        order = [Review.overall_rating.desc(), Review.created_at.desc()]
    elif sort_by == "lowest":
        order = [Review.overall_rating.asc(), Review.created_at.desc()]
    else:
        order = [Review.created_at.desc()]

    result = await db.execute(
        select(Review)
        .where(Review.building_id == building_id, Review.status == ModerationStatus.APPROVED)
        .order_by(*order, Review.id.asc())
    )
    reviews = list(result.scalars().all())

    # Authors only matter for named reviews; fetch them in one query.
    named_ids = {r.user_id for r in reviews if not r.is_anonymous}
    authors = await crud.get_users(db, named_ids)
    return [to_public_review(r, authors.get(r.user_id)) for r in reviews]


async def floor_insights(db: AsyncSession, building_id: str) -> list[FloorInsight]:
    """Average overall rating per floor across approved reviews."""
    await _require_visible_building(db, building_id)

    result = await db.execute(
        select(
            Review.floor_number,
            func.avg(Review.overall_rating).label("average_rating"),
            func.count(Review.id).label("review_count"),
        )
        .where(Review.building_id == building_id, Review.status == ModerationStatus.APPROVED)
        .group_by(Review.floor_number)
        .order_by(Review.floor_number)
    )
    return [
        FloorInsight(
            floor=row.floor_number,
            average_rating=float(row.average_rating),
            review_count=row.review_count,
        )
        for row in result
    ]
