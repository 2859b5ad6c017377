"""Seed the database with demo buildings and reviews."""

import asyncio

from app.config import get_settings
from app.db.engine import Database
from app.db.seed import seed_demo_data


async def seed():
    database = Database(get_settings().database_url)
    await database.create_all()

    async with database.session_factory() as db:
        created = await seed_demo_data(db)
    await database.dispose()

    if not created:
        print("Demo data already present, skipping seed.")
        return
    print(f"Created {created} demo buildings.")
    print("\nSeed complete. Start the server with: python -m app.cli serve")


if __name__ == "__main__":
    asyncio.run(seed())
