"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter

from quotes_api.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/healthz")
async def health_check() -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "ok",
        "version": settings.app_version,
        "environment": settings.app_env,
    }
