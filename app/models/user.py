"""User identity models.

Users and their sessions are owned by the identity provider; this service
only reads them to resolve the caller and to attribute non-anonymous reviews.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ULIDMixin


class User(Base, ULIDMixin):
    __tablename__ = "users"

    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)


class UserSession(Base, ULIDMixin):
    __tablename__ = "user_sessions"

    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"))
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
