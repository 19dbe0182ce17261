"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quotes_api.config import get_settings
from quotes_api.infrastructure.dependencies import (
    get_activity_broadcaster,
    get_activity_log,
    get_quote_repository,
)
from quotes_api.infrastructure.logging.log_config import setup_logging
from quotes_api.infrastructure.persistence import seed_sample_quotes
from quotes_api.presentation.api.endpoints.health import router as health_router
from quotes_api.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, seed quotes, close SSE streams."""
    settings = get_settings()
    setup_logging()

    # Building the log registers the broadcaster as its listener.
    get_activity_log()

    if settings.seed_sample_quotes:
        await seed_sample_quotes(get_quote_repository())

    logger.info("%s %s started (%s)", settings.app_title, settings.app_version, settings.app_env)

    yield

    # Shutdown
    broadcaster = get_activity_broadcaster()
    await broadcaster.shutdown()


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
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "quotes_api.main:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
    )
