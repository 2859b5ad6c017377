"""SQLAlchemy declarative base, ULID primary key mixin and moderation status."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Enum
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from ulid import ULID


class Base(DeclarativeBase):
    pass


class ModerationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class ULIDMixin:
    """Mixin that provides a ULID primary key and created_at timestamp."""

    id: Mapped[str] = mapped_column(
        String(26), primary_key=True, default=lambda: str(ULID())
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )


class ModeratedMixin:
    """Mixin for rows gated by moderation. New rows start as pending."""

    status: Mapped[ModerationStatus] = mapped_column(
        Enum(
            ModerationStatus,
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        default=ModerationStatus.PENDING,
        index=True,
    )
