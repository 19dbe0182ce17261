"""Top-level API router — aggregates all endpoint routers under /api."""

from fastapi import APIRouter

from quotes_api.presentation.api.endpoints.activity import router as activity_router
from quotes_api.presentation.api.endpoints.analytics import router as analytics_router
from quotes_api.presentation.api.endpoints.collections import router as collections_router
from quotes_api.presentation.api.endpoints.quotes import router as quotes_router
from quotes_api.presentation.api.endpoints.recommendations import router as recommendations_router

router = APIRouter(prefix="/api")
router.include_router(quotes_router)
router.include_router(analytics_router)
router.include_router(recommendations_router)
router.include_router(collections_router)
router.include_router(activity_router)
