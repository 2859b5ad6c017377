"""Caller identity resolution.

Sign-in is handled by the identity provider, which writes ``user_sessions``
rows keyed by a SHA-256 token hash. This module only turns a presented token
back into an ``AuthContext``.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db import crud
from app.errors import ForbiddenError, UnauthorizedError
from app.models import User


@dataclass
class AuthContext:
    user_id: str
    email: str
    display_name: str
    is_admin: bool = False


def _hash_token(token: str) -> str:
    """SHA-256 hash of a session token for DB storage."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def issue_session(db: AsyncSession, user: User, max_age_days: int | None = None) -> str:
    """Create a session for ``user``. Returns the raw token (not the hash).

    Lifetime defaults to ``Settings.session_max_age_days``.
    """
    if max_age_days is None:
        max_age_days = get_settings().session_max_age_days
    token = secrets.token_urlsafe(48)
    expires_at = datetime.now(timezone.utc) + timedelta(days=max_age_days)
    await crud.create_user_session(db, user.id, _hash_token(token), expires_at)
    return token


async def resolve_token(db: AsyncSession, token: str | None) -> AuthContext:
    """Return the caller behind ``token`` or raise UnauthorizedError."""
    if not token:
        raise UnauthorizedError("Not authenticated")

    session = await crud.get_active_session(db, _hash_token(token))
    if session is None:
        raise UnauthorizedError("Session expired")

    user = await db.get(User, session.user_id)
    if user is None:
        raise UnauthorizedError("Session expired")

    display_name = f"{user.first_name or ''} {user.last_name or ''}".strip()
    return AuthContext(
        user_id=user.id,
        email=user.email or "",
        display_name=display_name,
        is_admin=user.is_admin,
    )


def ensure_admin(auth: AuthContext) -> AuthContext:
    if not auth.is_admin:
        raise ForbiddenError("Insufficient permissions")
    return auth
