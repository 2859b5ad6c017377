import pytest

from app.models import ModerationStatus
from app.services.ratings import ZERO_RATINGS, get_building_ratings, get_ratings_for_buildings


async def test_building_without_reviews_has_zero_ratings(db, make_building):
    building = await make_building()
    ratings = await get_building_ratings(db, building.id)
    assert ratings.review_count == 0
    assert ratings.overall_rating == 0
    assert ratings.pest_rating == 0
    assert ratings == ZERO_RATINGS


async def test_averages_only_approved_reviews(db, make_building, make_review):
    building = await make_building()
    await make_review(building, overall_rating=5, noise_rating=4)
    await make_review(building, overall_rating=3, noise_rating=2)
    await make_review(building, overall_rating=1, noise_rating=1, status=ModerationStatus.PENDING)
    await make_review(building, overall_rating=1, status=ModerationStatus.DENIED)

    ratings = await get_building_ratings(db, building.id)
    assert ratings.review_count == 2
    assert ratings.overall_rating == pytest.approx(4.0)
    assert ratings.noise_rating == pytest.approx(3.0)


async def test_pending_review_does_not_change_aggregates(db, make_building, make_review):
    building = await make_building()
    await make_review(building, overall_rating=4, safety_rating=5)
    before = await get_building_ratings(db, building.id)

    await make_review(building, overall_rating=1, safety_rating=1, status=ModerationStatus.PENDING)
    after = await get_building_ratings(db, building.id)
    assert after == before


async def test_category_average_ignores_missing_values(db, make_building, make_review):
    building = await make_building()
    await make_review(building, overall_rating=4, cleanliness_rating=5)
    await make_review(building, overall_rating=2)

    ratings = await get_building_ratings(db, building.id)
    assert ratings.overall_rating == pytest.approx(3.0)
    assert ratings.cleanliness_rating == pytest.approx(5.0)
    # nobody rated pests: zero, not null
    assert ratings.pest_rating == 0.0


async def test_bulk_ratings_cover_every_requested_id(db, make_building, make_review):
    a = await make_building("A")
    b = await make_building("B")
    await make_review(a, overall_rating=5)
    await make_review(a, overall_rating=4)

    ratings = await get_ratings_for_buildings(db, [a.id, b.id, "missing"])
    assert ratings[a.id].review_count == 2
    assert ratings[a.id].overall_rating == pytest.approx(4.5)
    assert ratings[b.id] == ZERO_RATINGS
    assert ratings["missing"] == ZERO_RATINGS


async def test_bulk_ratings_empty_input(db):
    assert await get_ratings_for_buildings(db, []) == {}
