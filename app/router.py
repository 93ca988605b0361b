"""Central API router aggregating all domain routers."""

from fastapi import APIRouter

from app.auth.router import router as auth_router
from app.booking.router import router as booking_router
from app.core.constants import API_PREFIX
from app.health.router import router as health_router
from app.media.router import admin_router as media_admin_router
from app.media.router import media_router, upload_router
from app.talent.router import router as talent_router
from app.talent.router import talents_router
from app.user.router import router as user_router

api_router = APIRouter(prefix=API_PREFIX)

api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(talent_router)
api_router.include_router(talents_router)
api_router.include_router(upload_router)
api_router.include_router(media_router)
api_router.include_router(media_admin_router)
api_router.include_router(booking_router)
