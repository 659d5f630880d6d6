"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from remoteinbound.config import get_settings
from remoteinbound.application.services import ConferenceContentService
from remoteinbound.domain.exceptions import RemoteServiceError
from remoteinbound.infrastructure.dependencies import (
    get_cache,
    get_key_value_store,
    get_remote_data_service,
)
from remoteinbound.infrastructure.logging.log_config import setup_logging
from remoteinbound.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — open the local store and warm the content cache."""
    settings = get_settings()
    setup_logging()

    # 1. Create the key/value table (cache entries, fallback records, session)
    get_key_value_store()

    # 2. Warm sessions and speakers so the first page load is served from cache
    if settings.remote_configured:
        content = ConferenceContentService(get_remote_data_service(), get_cache())
        try:
            await content.preload_data()
            logger.info("Preloaded sessions and speakers into the cache")
        except RemoteServiceError as exc:
            logger.warning("Could not preload conference content: %s", exc)
    else:
        logger.warning(
            "SUPABASE_URL is not configured; reads will fail and registrations are stored locally."
        )

    yield


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "remoteinbound.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
