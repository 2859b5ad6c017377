from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, field_validator, model_serializer

from app.models import ModerationStatus
from app.schemas.common import CamelModel, UTCDateTime

MIN_REVIEW_TEXT_LENGTH = 50
MAX_REVIEW_PHOTOS = 5

ReviewSortBy = Literal["newest", "highest", "lowest"]

RatingValue = Annotated[int, Field(ge=1, le=5, strict=True)]


class ReviewCreate(CamelModel):
    overall_rating: int = Field(ge=1, le=5, strict=True)
    floor_number: int = Field(ge=1, le=100, strict=True)
    noise_rating: RatingValue | None = None
    cleanliness_rating: RatingValue | None = None
    maintenance_rating: RatingValue | None = None
    safety_rating: RatingValue | None = None
    pest_rating: RatingValue | None = None
    review_text: str
    is_anonymous: bool = True
    photo_urls: list[str] = Field(default_factory=list)

    @field_validator("review_text")
    @classmethod
    def _text_length(cls, v: str) -> str:
        if len(v) < MIN_REVIEW_TEXT_LENGTH:
            raise ValueError(f"Review must be at least {MIN_REVIEW_TEXT_LENGTH} characters")
        return v

    @field_validator("photo_urls")
    @classmethod
    def _photo_urls(cls, v: list[str]) -> list[str]:
        if len(v) > MAX_REVIEW_PHOTOS:
            raise ValueError(f"At most {MAX_REVIEW_PHOTOS} photos per review")
        for url in v:
            if not url.startswith(("http://", "https://")):
                raise ValueError("Photo URLs must be http(s) URLs")
        return v


class ReviewPhotoRead(CamelModel):
    id: str
    review_id: str
    image_url: str
    created_at: UTCDateTime


class ReviewRead(CamelModel):
    id: str
    building_id: str
    user_id: str
    overall_rating: int
    floor_number: int
    noise_rating: int | None = None
    cleanliness_rating: int | None = None
    maintenance_rating: int | None = None
    safety_rating: int | None = None
    pest_rating: int | None = None
    review_text: str
    is_anonymous: bool
    status: ModerationStatus
    created_at: UTCDateTime
    photos: list[ReviewPhotoRead] = []


class ReviewWithDetails(CamelModel):
    """Public representation of an approved review.

    The author's user id is never included, and ``userName`` and
    ``userProfileImage`` are left out of the payload entirely unless the
    author chose to be named.
    """

    id: str
    building_id: str
    overall_rating: int
    floor_number: int
    noise_rating: int | None = None
    cleanliness_rating: int | None = None
    maintenance_rating: int | None = None
    safety_rating: int | None = None
    pest_rating: int | None = None
    review_text: str
    is_anonymous: bool
    created_at: UTCDateTime
    photos: list[ReviewPhotoRead] = []
    user_name: str | None = None
    user_profile_image: str | None = None

    @model_serializer(mode="wrap")
    def _omit_missing_author(self, handler):
        data = handler(self)
        for key in ("user_name", "userName", "user_profile_image", "userProfileImage"):
            if key in data and data[key] is None:
                del data[key]
        return data


class FloorInsight(CamelModel):
    floor: int
    average_rating: float
    review_count: int
