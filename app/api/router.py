"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from app.api.auth import router as auth_router
from app.api.buildings import router as buildings_router
from app.api.reviews import router as reviews_router
from app.api.admin import router as admin_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(buildings_router)
api_router.include_router(reviews_router)
api_router.include_router(admin_router)
