import pytest

from app.errors import NotFoundError
from app.models import ModerationStatus
from app.schemas import BuildingFilters
from app.services import listing


async def test_list_only_approved_by_default(db, make_building):
    await make_building("Visible")
    await make_building("Waiting", status=ModerationStatus.PENDING)
    await make_building("Rejected", status=ModerationStatus.DENIED)

    page = await listing.list_buildings(db, BuildingFilters())
    assert [b.name for b in page.buildings] == ["Visible"]
    assert page.total == 1
    assert page.has_more is False


async def test_status_filter_selects_pending(db, make_building):
    await make_building("Visible")
    await make_building("Waiting", status=ModerationStatus.PENDING)

    page = await listing.list_buildings(db, BuildingFilters(status=ModerationStatus.PENDING))
    assert [b.name for b in page.buildings] == ["Waiting"]


async def test_text_search_matches_name_address_or_neighborhood(db, make_building):
    await make_building("Riverside Lofts", address="10 Water St")
    await make_building("Park Plaza", address="55 Riverside Drive")
    await make_building("Ditmars House", neighborhood="Queens - Astoria")
    await make_building("Unrelated", address="1 Elm St")

    page = await listing.list_buildings(db, BuildingFilters(q="riverSIDE"))
    assert {b.name for b in page.buildings} == {"Riverside Lofts", "Park Plaza"}

    page = await listing.list_buildings(db, BuildingFilters(q="astoria"))
    assert [b.name for b in page.buildings] == ["Ditmars House"]


async def test_text_search_treats_wildcards_literally(db, make_building):
    await make_building("100% Rentals")
    await make_building("Plain Name")

    page = await listing.list_buildings(db, BuildingFilters(q="%"))
    assert [b.name for b in page.buildings] == ["100% Rentals"]


async def test_category_filters_and_all(db, make_building):
    await make_building("Loft A", neighborhood="Brooklyn - DUMBO", building_type="Loft")
    await make_building("Condo B", neighborhood="Brooklyn - DUMBO", building_type="Condo")
    await make_building("Loft C", neighborhood="Manhattan - SoHo", building_type="Loft")

    page = await listing.list_buildings(db, BuildingFilters(neighborhood="Brooklyn - DUMBO"))
    assert {b.name for b in page.buildings} == {"Loft A", "Condo B"}

    page = await listing.list_buildings(db, BuildingFilters(building_type="Loft", neighborhood="all"))
    assert {b.name for b in page.buildings} == {"Loft A", "Loft C"}

    page = await listing.list_buildings(
        db, BuildingFilters(building_type="Loft", neighborhood="Manhattan - SoHo"),
    )
    assert [b.name for b in page.buildings] == ["Loft C"]


async def test_sort_by_rating_uses_approved_average(db, make_building, make_review):
    low = await make_building("Low")
    high = await make_building("High")
    await make_building("Unrated")
    await make_review(low, overall_rating=2)
    await make_review(high, overall_rating=5)
    await make_review(low, overall_rating=5, status=ModerationStatus.PENDING)

    page = await listing.list_buildings(db, BuildingFilters(sort_by="rating"))
    assert [b.name for b in page.buildings] == ["High", "Low", "Unrated"]
    assert page.buildings[0].overall_rating == pytest.approx(5.0)
    assert page.buildings[2].overall_rating == 0
    assert page.buildings[2].review_count == 0


async def test_sort_by_reviews_ranks_higher_count_first(db, make_building, make_review):
    a = await make_building("A")
    b = await make_building("B")
    for rating in [4, 5] * 5:
        await make_review(a, overall_rating=rating)
    await make_review(b, overall_rating=5)
    await make_review(b, overall_rating=4)
    await make_review(b, overall_rating=5)
    await make_review(b, overall_rating=4)

    page = await listing.list_buildings(db, BuildingFilters(sort_by="reviews"))
    assert [x.name for x in page.buildings] == ["A", "B"]
    assert page.buildings[0].review_count == 10
    assert page.buildings[0].overall_rating == pytest.approx(4.5)
    assert page.buildings[1].overall_rating == pytest.approx(4.5)


async def test_sort_by_newest(db, make_building):
    await make_building("Oldest")
    await make_building("Middle")
    await make_building("Newest")

    page = await listing.list_buildings(db, BuildingFilters(sort_by="newest"))
    assert [b.name for b in page.buildings] == ["Newest", "Middle", "Oldest"]


async def test_pages_are_disjoint_and_concatenate(db, make_building, make_review):
    for i in range(30):
        building = await make_building(f"Building {i:02d}")
        # many ties on purpose: only three distinct averages
        await make_review(building, overall_rating=(i % 3) + 3)

    first = await listing.list_buildings(db, BuildingFilters(limit=12, offset=0))
    second = await listing.list_buildings(db, BuildingFilters(limit=12, offset=12))
    both = await listing.list_buildings(db, BuildingFilters(limit=24, offset=0))

    first_ids = [b.id for b in first.buildings]
    second_ids = [b.id for b in second.buildings]
    assert not set(first_ids) & set(second_ids)
    assert first_ids + second_ids == [b.id for b in both.buildings]
    assert first.total == second.total == 30
    assert first.has_more and second.has_more


async def test_has_more_false_on_last_page(db, make_building):
    for i in range(5):
        await make_building(f"B{i}")

    page = await listing.list_buildings(db, BuildingFilters(limit=3, offset=3))
    assert len(page.buildings) == 2
    assert page.total == 5
    assert page.has_more is False

    beyond = await listing.list_buildings(db, BuildingFilters(limit=3, offset=10))
    assert beyond.buildings == []
    assert beyond.total == 5


async def test_get_building_public_and_admin_paths(db, make_building, make_review):
    approved = await make_building("Approved")
    pending = await make_building("Pending", status=ModerationStatus.PENDING)
    await make_review(approved, overall_rating=3, pest_rating=2)

    found = await listing.get_building(db, approved.id)
    assert found.review_count == 1
    assert found.overall_rating == pytest.approx(3.0)
    assert found.pest_rating == pytest.approx(2.0)
    assert found.noise_rating == 0

    with pytest.raises(NotFoundError):
        await listing.get_building(db, pending.id)
    with pytest.raises(NotFoundError):
        await listing.get_building(db, "does-not-exist")

    admin_view = await listing.get_building(db, pending.id, include_unmoderated=True)
    assert admin_view.status == ModerationStatus.PENDING


async def test_autocomplete_short_query_returns_nothing(db, make_building):
    await make_building("Avalon")
    assert await listing.autocomplete(db, "a") == []
    assert await listing.autocomplete(db, " ") == []
    assert await listing.autocomplete(db, None) == []


async def test_autocomplete_matches_and_limits(db, make_building):
    for i in range(10):
        await make_building(f"Avenue Court {i}")
    await make_building("Elm House", address="12 Park AVenue")
    await make_building("Avery Pending", status=ModerationStatus.PENDING)
    await make_building("Nothing Here", address="9 Elm St")

    results = await listing.autocomplete(db, "av")
    assert 0 < len(results) <= 8
    for r in results:
        assert "av" in r.name.lower() or "av" in r.address.lower()
    assert "Avery Pending" not in {r.name for r in results}
    assert [r.name for r in results] == sorted(r.name for r in results)
