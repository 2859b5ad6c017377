from datetime import datetime, timedelta, timezone

import pydantic
import pytest

from app.models import ModerationStatus
from app.schemas import BuildingCreate, BuildingFilters, BuildingRead, ReviewCreate


def test_building_create_valid():
    building = BuildingCreate(
        name="The Dakota", address="1 W 72nd St", zipCode="10023",
        neighborhood="Manhattan - Upper West Side", buildingType="Co-op",
    )
    assert building.zip_code == "10023"
    assert building.city == "New York"
    assert building.building_type == "Co-op"


def test_building_create_blank_optionals_become_none():
    building = BuildingCreate(name="Loft", address="5 Front St", zipCode="11201", neighborhood="", landlordName=" ")
    assert building.neighborhood is None
    assert building.landlord_name is None


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": "A"}, "Building name must be at least 2 characters"),
        ({"address": "1 A"}, "Address must be at least 5 characters"),
        ({"zipCode": "1234"}, "Must be a valid 5-digit ZIP code"),
        ({"zipCode": "1234a"}, "Must be a valid 5-digit ZIP code"),
        ({"neighborhood": "Atlantis"}, "Unknown neighborhood"),
        ({"buildingType": "Castle"}, "Unknown building type"),
    ],
)
def test_building_create_invalid(overrides, message):
    data = {"name": "The Dakota", "address": "1 W 72nd St", "zipCode": "10023", **overrides}
    with pytest.raises(pydantic.ValidationError) as exc:
        BuildingCreate(**data)
    assert message in str(exc.value)


def test_review_text_length_boundary():
    with pytest.raises(pydantic.ValidationError):
        ReviewCreate(overallRating=4, floorNumber=3, reviewText="x" * 49)
    review = ReviewCreate(overallRating=4, floorNumber=3, reviewText="x" * 50)
    assert review.is_anonymous is True
    assert review.photo_urls == []


@pytest.mark.parametrize(
    "field, value",
    [
        ("overallRating", 0),
        ("overallRating", 6),
        ("floorNumber", 0),
        ("floorNumber", 101),
        ("noiseRating", 0),
        ("pestRating", 6),
        ("overallRating", True),
        ("floorNumber", True),
        ("noiseRating", False),
    ],
)
def test_review_ranges(field, value):
    data = {"overallRating": 4, "floorNumber": 3, "reviewText": "x" * 50, field: value}
    with pytest.raises(pydantic.ValidationError):
        ReviewCreate(**data)


def test_review_photo_urls():
    with pytest.raises(pydantic.ValidationError):
        ReviewCreate(overallRating=4, floorNumber=3, reviewText="x" * 50, photoUrls=["ftp://x"])
    with pytest.raises(pydantic.ValidationError):
        ReviewCreate(overallRating=4, floorNumber=3, reviewText="x" * 50, photoUrls=["https://a"] * 6)


def test_filters_defaults():
    filters = BuildingFilters()
    assert filters.sort_by == "rating"
    assert filters.limit == 12
    assert filters.offset == 0
    assert filters.status == ModerationStatus.APPROVED
    assert filters.neighborhood == "all"


def test_filters_blank_category_means_all():
    filters = BuildingFilters(neighborhood="", building_type="", q="   ")
    assert filters.neighborhood == "all"
    assert filters.building_type == "all"
    assert filters.q is None


@pytest.mark.parametrize(
    "overrides",
    [{"limit": 0}, {"offset": -1}, {"sort_by": "price"}, {"neighborhood": "Nowhere"}],
)
def test_filters_reject_invalid(overrides):
    with pytest.raises(pydantic.ValidationError):
        BuildingFilters(**overrides)


def test_filters_errors_name_wire_fields():
    with pytest.raises(pydantic.ValidationError) as exc:
        BuildingFilters.model_validate({"sortBy": "price"})
    assert exc.value.errors()[0]["loc"] == ("sortBy",)


@pytest.mark.parametrize(
    "created_at",
    [
        datetime(2024, 5, 1, 12, 30),
        datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
        datetime(2024, 5, 1, 8, 30, tzinfo=timezone(timedelta(hours=-4))),
    ],
)
def test_created_at_always_serialized_as_utc(created_at):
    building = BuildingRead(
        id="b1", name="Loft", address="5 Front St", city="New York", zipCode="11201",
        status=ModerationStatus.APPROVED, createdAt=created_at,
    )
    assert building.model_dump(mode="json", by_alias=True)["createdAt"] == "2024-05-01T12:30:00Z"
