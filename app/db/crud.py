"""CRUD operations for the entity store."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import StoreError
from app.models import Building, ModerationStatus, Review, ReviewPhoto, User, UserSession


async def _commit(db: AsyncSession) -> None:
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StoreError(f"Could not save changes: {exc.__class__.__name__}") from exc


# ── Building ──────────────────────────────────────────────

async def get_building(db: AsyncSession, building_id: str) -> Building | None:
    return await db.get(Building, building_id)


async def create_building(db: AsyncSession, **fields) -> Building:
    building = Building(status=ModerationStatus.PENDING, **fields)
    db.add(building)
    await _commit(db)
    await db.refresh(building)
    return building


async def list_buildings_by_status(db: AsyncSession, status: ModerationStatus) -> list[Building]:
    result = await db.execute(
        select(Building)
        .where(Building.status == status)
        .order_by(Building.created_at, Building.id)
    )
    return list(result.scalars().all())


# ── Review ────────────────────────────────────────────────

async def get_review(db: AsyncSession, review_id: str) -> Review | None:
    return await db.get(Review, review_id)


async def create_review(db: AsyncSession, photo_urls: list[str] | None = None, **fields) -> Review:
    review = Review(status=ModerationStatus.PENDING, **fields)
    review.photos = [ReviewPhoto(image_url=url) for url in (photo_urls or [])]
    db.add(review)
    await _commit(db)
    return review


async def list_reviews_by_status(db: AsyncSession, status: ModerationStatus) -> list[Review]:
    result = await db.execute(
        select(Review)
        .where(Review.status == status)
        .order_by(Review.created_at, Review.id)
    )
    return list(result.scalars().all())


# ── Moderation ────────────────────────────────────────────

async def update_status(db: AsyncSession, row: Building | Review, status: ModerationStatus) -> Building | Review:
    row.status = status
    await _commit(db)
    await db.refresh(row)
    return row


async def count_rows(db: AsyncSession, model, status: ModerationStatus | None = None) -> int:
    stmt = select(func.count()).select_from(model)
    if status is not None:
        stmt = stmt.where(model.status == status)
    result = await db.execute(stmt)
    return result.scalar_one()


# ── Users & sessions ──────────────────────────────────────

async def get_users(db: AsyncSession, user_ids: set[str]) -> dict[str, User]:
    """Fetch many users in one round trip, keyed by id."""
    if not user_ids:
        return {}
    result = await db.execute(select(User).where(User.id.in_(user_ids)))
    return {u.id: u for u in result.scalars().all()}


async def create_user(
    db: AsyncSession, email: str, first_name: str = "", last_name: str = "",
    profile_image_url: str | None = None, is_admin: bool = False,
) -> User:
    user = User(
        email=email, first_name=first_name or None, last_name=last_name or None,
        profile_image_url=profile_image_url, is_admin=is_admin,
    )
    db.add(user)
    await _commit(db)
    await db.refresh(user)
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def create_user_session(db: AsyncSession, user_id: str, token_hash: str, expires_at: datetime) -> UserSession:
    session = UserSession(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
    db.add(session)
    await _commit(db)
    return session


async def get_active_session(db: AsyncSession, token_hash: str) -> UserSession | None:
    result = await db.execute(
        select(UserSession).where(
            UserSession.token_hash == token_hash,
            UserSession.expires_at > datetime.now(timezone.utc),
        )
    )
    return result.scalars().first()
