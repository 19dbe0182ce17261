"""Pydantic DTOs for recommendations and live feeds."""

from datetime import datetime

from pydantic import BaseModel

from quotes_api.domain.entities import FeedType, RecommendationAlgorithm

from .activity import ActivityEventResponse
from .quote import QuoteWithStatsResponse


class RecommendationResponse(BaseModel):
    quote: QuoteWithStatsResponse
    score: float
    confidence: float
    reason: str | None = None

    model_config = {"from_attributes": True}


class RecommendationResultResponse(BaseModel):
    algorithm: RecommendationAlgorithm
    reason: str
    recommendations: list[RecommendationResponse]

    model_config = {"from_attributes": True}


class FeedItemResponse(BaseModel):
    quote: QuoteWithStatsResponse
    relevance_score: float
    activity: ActivityEventResponse | None = None

    model_config = {"from_attributes": True}


class LiveFeedResponse(BaseModel):
    feed_type: FeedType
    items: list[FeedItemResponse]
    last_updated: datetime
    next_update: datetime

    model_config = {"from_attributes": True}
