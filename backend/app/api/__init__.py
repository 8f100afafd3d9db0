"""API router aggregation."""

from fastapi import APIRouter

from app.api.auth import router as auth_router
from app.api.profile import router as profile_router
from app.api.links import router as links_router
from app.api.platforms import router as platforms_router

router = APIRouter(prefix="/api")

router.include_router(auth_router)
router.include_router(profile_router)
router.include_router(links_router)
router.include_router(platforms_router)
