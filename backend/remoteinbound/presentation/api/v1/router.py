"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from remoteinbound.presentation.api.v1.endpoints.health import router as health_router
from remoteinbound.presentation.api.v1.endpoints.registrations import router as registrations_router
from remoteinbound.presentation.api.v1.endpoints.speakers import router as speakers_router
from remoteinbound.presentation.api.v1.endpoints.sessions import router as sessions_router
from remoteinbound.presentation.api.v1.endpoints.events import router as events_router
from remoteinbound.presentation.api.v1.endpoints.event_registrations import (
    router as event_registrations_router,
)
from remoteinbound.presentation.api.v1.endpoints.cache import router as cache_router
from remoteinbound.presentation.api.v1.endpoints.admin import router as admin_router
from remoteinbound.presentation.api.v1.endpoints.users import router as users_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(registrations_router)
router.include_router(users_router)
router.include_router(speakers_router)
router.include_router(sessions_router)
router.include_router(events_router)
router.include_router(event_registrations_router)
router.include_router(cache_router)
router.include_router(admin_router)
