"""Rating aggregation over approved reviews.

All aggregates come from one ``GROUP BY building_id`` query. Pending and
denied reviews never contribute. A building without approved reviews, or a
category nobody rated, reports 0 rather than null.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict

from sqlalchemy import func, select
from sqlalchemy.sql.selectable import Subquery
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import CATEGORY_RATINGS, ModerationStatus, Review

AVERAGED_COLUMNS: tuple[str, ...] = ("overall_rating", *CATEGORY_RATINGS)


@dataclass(frozen=True)
class BuildingRatings:
    review_count: int = 0
    overall_rating: float = 0.0
    noise_rating: float = 0.0
    cleanliness_rating: float = 0.0
    maintenance_rating: float = 0.0
    safety_rating: float = 0.0
    pest_rating: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


ZERO_RATINGS = BuildingRatings()


def ratings_subquery(building_ids: list[str] | None = None) -> Subquery:
    """Per-building count and averages over approved reviews.

    Columns: ``building_id``, ``review_count`` and one ``avg_<dimension>``
    per entry in ``AVERAGED_COLUMNS``. Suitable as an outer-join target.
    """
    stmt = (
        select(
            Review.building_id.label("building_id"),
            func.count(Review.id).label("review_count"),
            *(func.avg(getattr(Review, col)).label(f"avg_{col}") for col in AVERAGED_COLUMNS),
        )
        .where(Review.status == ModerationStatus.APPROVED)
        .group_by(Review.building_id)
    )
    if building_ids is not None:
        stmt = stmt.where(Review.building_id.in_(building_ids))
    return stmt.subquery("ratings")


def ratings_from_row(row) -> BuildingRatings:
    """Build ``BuildingRatings`` from a row carrying the subquery's columns.

    Buildings with no approved reviews come back from the outer join with
    NULLs, which map to the zero default.
    """
    mapping = row._mapping
    values = {}
    for col in AVERAGED_COLUMNS:
        avg = mapping[f"avg_{col}"]
        values[col] = float(avg) if avg is not None else 0.0
    return BuildingRatings(review_count=int(mapping["review_count"] or 0), **values)


async def get_ratings_for_buildings(db: AsyncSession, building_ids: list[str]) -> dict[str, BuildingRatings]:
    """Aggregate many buildings in one query. Unknown ids get zero ratings."""
    if not building_ids:
        return {}
    sub = ratings_subquery(building_ids)
    result = await db.execute(select(sub))
    found = {row.building_id: ratings_from_row(row) for row in result}
    return {bid: found.get(bid, ZERO_RATINGS) for bid in building_ids}


async def get_building_ratings(db: AsyncSession, building_id: str) -> BuildingRatings:
    ratings = await get_ratings_for_buildings(db, [building_id])
    return ratings[building_id]
