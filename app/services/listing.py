"""Building listing: filter, sort by derived ratings, paginate.

The approved-review aggregate is outer-joined onto the filtered building set
and the database does the ordering and slicing, so a page costs two queries
(the page and the total) regardless of how many buildings match.
"""

from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError
from app.models import Building, ModerationStatus
from app.schemas import BuildingFilters, BuildingRead, BuildingSuggestion, BuildingWithRatings, PaginatedBuildings
from app.schemas.building import ALL
from app.services.ratings import BuildingRatings, get_building_ratings, ratings_from_row, ratings_subquery

AUTOCOMPLETE_LIMIT = 8
AUTOCOMPLETE_MIN_CHARS = 2


def with_ratings(building: Building, ratings: BuildingRatings) -> BuildingWithRatings:
    base = BuildingRead.model_validate(building).model_dump()
    return BuildingWithRatings(**base, **ratings.as_dict())


def _filter_conditions(filters: BuildingFilters) -> list:
    conditions = [Building.status == filters.status]
    if filters.q:
        conditions.append(or_(
            Building.name.icontains(filters.q, autoescape=True),
            Building.address.icontains(filters.q, autoescape=True),
            Building.neighborhood.icontains(filters.q, autoescape=True),
        ))
    if filters.neighborhood != ALL:
        conditions.append(Building.neighborhood == filters.neighborhood)
    if filters.building_type != ALL:
        conditions.append(Building.building_type == filters.building_type)
    return conditions


def _order_by(filters: BuildingFilters, ratings) -> list:
    if filters.sort_by == "reviews":
        primary = func.coalesce(ratings.c.review_count, 0).desc()
    elif filters.sort_by == "newest":
        primary = Building.created_at.desc()
    else:
        primary = func.coalesce(ratings.c.avg_overall_rating, 0).desc()
    # id keeps equal keys in the same order on every page
    return [primary, Building.id.asc()]


async def list_buildings(db: AsyncSession, filters: BuildingFilters) -> PaginatedBuildings:
    conditions = _filter_conditions(filters)

    total_result = await db.execute(
        select(func.count()).select_from(Building).where(*conditions)
    )
    total = total_result.scalar_one()

    ratings = ratings_subquery()
    stmt = (
        select(Building, *[c for c in ratings.c if c.name != "building_id"])
        .outerjoin(ratings, ratings.c.building_id == Building.id)
        .where(*conditions)
        .order_by(*_order_by(filters, ratings))
        .limit(filters.limit)
        .offset(filters.offset)
    )
    result = await db.execute(stmt)
    buildings = [with_ratings(row.Building, ratings_from_row(row)) for row in result]

    return PaginatedBuildings(
        buildings=buildings,
        total=total,
        has_more=filters.offset + filters.limit < total,
    )


async def get_building(db: AsyncSession, building_id: str, include_unmoderated: bool = False) -> BuildingWithRatings:
    """Building plus aggregates. The public path only sees approved buildings."""
    building = await db.get(Building, building_id)
    if building is None or (not include_unmoderated and building.status != ModerationStatus.APPROVED):
        raise NotFoundError("Building not found")
    ratings = await get_building_ratings(db, building.id)
    return with_ratings(building, ratings)


async def autocomplete(
    db: AsyncSession, query: str | None,
    limit: int = AUTOCOMPLETE_LIMIT, min_chars: int = AUTOCOMPLETE_MIN_CHARS,
) -> list[BuildingSuggestion]:
    query = (query or "").strip()
    if len(query) < min_chars:
        return []

    result = await db.execute(
        select(Building.id, Building.name, Building.address)
        .where(
            Building.status == ModerationStatus.APPROVED,
            or_(
                Building.name.icontains(query, autoescape=True),
                Building.address.icontains(query, autoescape=True),
            ),
        )
        .order_by(Building.name.asc(), Building.id.asc())
        .limit(limit)
    )
    return [BuildingSuggestion(id=r.id, name=r.name, address=r.address) for r in result]
