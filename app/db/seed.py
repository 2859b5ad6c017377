"""Demo data: a handful of approved buildings with approved reviews."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Building, ModerationStatus, Review, User

DEMO_USER_EMAIL = "demo@example.com"

_DEMO_TEXT = (
    "Lived here for two years. Management answered maintenance requests quickly, "
    "the hallways were kept clean and the neighbors were friendly."
)

DEMO_BUILDINGS = [
    {
        "name": "The Ansonia",
        "address": "2109 Broadway",
        "zip_code": "10023",
        "neighborhood": "Manhattan - Upper West Side",
        "building_type": "High-rise",
        "reviews": [(5, 12, 4, 5), (4, 3, 3, 4)],
    },
    {
        "name": "Avalon Fort Greene",
        "address": "343 Gold Street",
        "city": "Brooklyn",
        "zip_code": "11201",
        "neighborhood": "Brooklyn - DUMBO",
        "building_type": "High-rise",
        "reviews": [(4, 20, 4, 4), (3, 7, 2, 3), (4, 15, None, 4)],
    },
    {
        "name": "Astoria Walk-up",
        "address": "31-10 Ditmars Blvd",
        "city": "Queens",
        "zip_code": "11105",
        "neighborhood": "Queens - Astoria",
        "building_type": "Walk-up",
        "reviews": [(3, 2, 2, 3)],
    },
    {
        "name": "Bedford Brownstone",
        "address": "412 Macon Street",
        "city": "Brooklyn",
        "zip_code": "11233",
        "neighborhood": "Brooklyn - Bedford-Stuyvesant",
        "building_type": "Brownstone",
        "reviews": [],
    },
]


async def seed_demo_data(db: AsyncSession) -> int:
    """Insert the demo set once. Returns the number of buildings created."""
    result = await db.execute(select(User).where(User.email == DEMO_USER_EMAIL))
    if result.scalars().first():
        return 0

    user = User(email=DEMO_USER_EMAIL, first_name="Demo", last_name="Resident")
    db.add(user)
    await db.flush()

    for entry in DEMO_BUILDINGS:
        fields = {k: v for k, v in entry.items() if k != "reviews"}
        building = Building(status=ModerationStatus.APPROVED, created_by=user.id, **fields)
        db.add(building)
        await db.flush()
        for i, (overall, floor, noise, cleanliness) in enumerate(entry["reviews"]):
            db.add(Review(
                building_id=building.id,
                user_id=user.id,
                overall_rating=overall,
                floor_number=floor,
                noise_rating=noise,
                cleanliness_rating=cleanliness,
                review_text=_DEMO_TEXT,
                is_anonymous=i % 2 == 0,
                status=ModerationStatus.APPROVED,
            ))

    await db.commit()
    return len(DEMO_BUILDINGS)
