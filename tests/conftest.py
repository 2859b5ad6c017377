from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from app.db.engine import Database
from app.models import Building, ModerationStatus, Review, User

MEMORY_URL = "sqlite+aiosqlite:///:memory:"
LONG_TEXT = "A quiet, well-kept building with responsive staff and few issues overall."

_BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def database():
    database = Database(MEMORY_URL, poolclass=StaticPool)
    await database.create_all()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def db(database):
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def make_user(db):
    async def _make(email: str = "tenant@example.com", **fields) -> User:
        user = User(email=email, **fields)
        db.add(user)
        await db.commit()
        return user
    return _make


@pytest.fixture
def make_building(db):
    counter = {"n": 0}

    async def _make(
        name: str = "Test Tower",
        status: ModerationStatus = ModerationStatus.APPROVED,
        **fields,
    ) -> Building:
        counter["n"] += 1
        fields.setdefault("address", f"{counter['n']} Main Street")
        fields.setdefault("zip_code", "10001")
        # Strictly increasing timestamps so "newest" ordering is deterministic
        fields.setdefault("created_at", _BASE_TIME + timedelta(minutes=counter["n"]))
        building = Building(name=name, status=status, **fields)
        db.add(building)
        await db.commit()
        return building
    return _make


@pytest.fixture
def make_review(db):
    counter = {"n": 0}

    async def _make(
        building: Building,
        overall_rating: int = 4,
        status: ModerationStatus = ModerationStatus.APPROVED,
        **fields,
    ) -> Review:
        counter["n"] += 1
        fields.setdefault("user_id", "01USER0000000000000000000X")
        fields.setdefault("floor_number", 3)
        fields.setdefault("review_text", LONG_TEXT)
        fields.setdefault("created_at", _BASE_TIME + timedelta(hours=counter["n"]))
        review = Review(
            building_id=building.id, overall_rating=overall_rating, status=status, **fields,
        )
        db.add(review)
        await db.commit()
        return review
    return _make
