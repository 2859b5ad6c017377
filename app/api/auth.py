"""Auth API: who the caller is. Sign-in itself lives with the identity provider."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, require_auth
from app.errors import UnauthorizedError
from app.models import User
from app.schemas import CurrentUser
from app.services.auth import AuthContext

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/user", response_model=CurrentUser)
async def get_current_user(
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    user = await db.get(User, auth.user_id)
    if user is None:
        raise UnauthorizedError("Not authenticated")
    return user
