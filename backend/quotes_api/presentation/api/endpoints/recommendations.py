"""Recommendation, live feed and history endpoints."""

from fastapi import APIRouter, Depends, Query

from quotes_api.application.schemas import (
    LiveFeedResponse,
    QuoteWithStatsResponse,
    RecommendationResultResponse,
)
from quotes_api.application.services import QuoteService
from quotes_api.domain.entities import FeedType, RecommendationAlgorithm
from quotes_api.infrastructure.dependencies import get_quote_service

router = APIRouter(tags=["Recommendations"])


@router.get("/recommendations/smart", response_model=RecommendationResultResponse)
async def get_smart_recommendations(
    user_id: str = Query(..., min_length=1),
    limit: int = Query(5, ge=1, le=50),
    algorithm: RecommendationAlgorithm = Query(RecommendationAlgorithm.HYBRID),
    include_explanation: bool = Query(True),
    service: QuoteService = Depends(get_quote_service),
) -> RecommendationResultResponse:
    """Personalized recommendations using the chosen strategy."""
    result = await service.get_smart_recommendations(
        user_id, limit, algorithm, include_explanation
    )
    return RecommendationResultResponse.model_validate(result, from_attributes=True)


@router.get("/feed/live", response_model=LiveFeedResponse)
async def get_live_feed(
    user_id: str | None = Query(None),
    limit: int = Query(10, ge=1, le=50),
    feed_type: FeedType = Query(FeedType.PERSONALIZED),
    include_activity: bool = Query(True),
    service: QuoteService = Depends(get_quote_service),
) -> LiveFeedResponse:
    feed = await service.get_live_feed(user_id, limit, feed_type, include_activity)
    return LiveFeedResponse.model_validate(feed, from_attributes=True)


@router.get("/users/{user_id}/history", response_model=list[QuoteWithStatsResponse])
async def get_quote_history(
    user_id: str,
    limit: int = Query(20, ge=1, le=100),
    service: QuoteService = Depends(get_quote_service),
) -> list[QuoteWithStatsResponse]:
    """Quotes the user interacted with, most recent first."""
    quotes = await service.get_quote_history(user_id, limit)
    return [QuoteWithStatsResponse.model_validate(q, from_attributes=True) for q in quotes]
