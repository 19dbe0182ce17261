"""Pydantic DTOs for analytics, dashboards and pattern insights."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from quotes_api.domain.entities import PatternType, TimeRange

from .activity import ActivityEventResponse
from .quote import QuoteWithStatsResponse


class AuthorStatsResponse(BaseModel):
    author: str
    quote_count: int
    total_likes: int
    average_likes: float

    model_config = {"from_attributes": True}


class TagStatsResponse(BaseModel):
    tag: str
    count: int
    average_likes: float

    model_config = {"from_attributes": True}


class EngagementBucketResponse(BaseModel):
    timestamp: datetime
    count: int

    model_config = {"from_attributes": True}


class AnalyticsSummaryResponse(BaseModel):
    total_quotes: int
    total_likes: int
    most_liked_quote: QuoteWithStatsResponse | None
    trending_quotes: list[QuoteWithStatsResponse]
    popular_authors: list[AuthorStatsResponse]
    recent_activity: list[ActivityEventResponse]

    model_config = {"from_attributes": True}


class DashboardOverviewResponse(BaseModel):
    total_quotes: int
    total_likes: int
    total_users: int
    average_likes_per_quote: float
    quotes_added_in_range: int

    model_config = {"from_attributes": True}


class AnalyticsDashboardResponse(BaseModel):
    time_range: TimeRange
    overview: DashboardOverviewResponse
    most_liked_quotes: list[QuoteWithStatsResponse]
    popular_authors: list[AuthorStatsResponse]
    likes_over_time: list[EngagementBucketResponse]
    top_tags: list[TagStatsResponse]
    recent_activity: list[ActivityEventResponse]

    model_config = {"from_attributes": True}


class PatternInsightResponse(BaseModel):
    title: str
    description: str
    confidence: float
    data: dict[str, Any]

    model_config = {"from_attributes": True}


class PatternReportResponse(BaseModel):
    pattern_type: PatternType
    insights: list[PatternInsightResponse]
    recommendations: list[str]
    generated_at: datetime

    model_config = {"from_attributes": True}
