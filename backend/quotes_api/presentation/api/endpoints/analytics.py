"""Analytics and insight endpoints."""

from fastapi import APIRouter, Depends, Query

from quotes_api.application.schemas import (
    AnalyticsDashboardResponse,
    AnalyticsSummaryResponse,
    AuthorStatsResponse,
    PatternReportResponse,
)
from quotes_api.application.services import QuoteService
from quotes_api.domain.entities import PatternType, TimeRange
from quotes_api.infrastructure.dependencies import get_quote_service

router = APIRouter(tags=["Analytics"])


@router.get("/analytics", response_model=AnalyticsSummaryResponse)
async def get_analytics(
    service: QuoteService = Depends(get_quote_service),
) -> AnalyticsSummaryResponse:
    """Totals, most liked quote, trending quotes and recent activity."""
    summary = await service.get_analytics()
    return AnalyticsSummaryResponse.model_validate(summary, from_attributes=True)


@router.get("/analytics/dashboard", response_model=AnalyticsDashboardResponse)
async def get_analytics_dashboard(
    time_range: TimeRange = Query(TimeRange.LAST_DAY),
    service: QuoteService = Depends(get_quote_service),
) -> AnalyticsDashboardResponse:
    dashboard = await service.get_analytics_dashboard(time_range)
    return AnalyticsDashboardResponse.model_validate(dashboard, from_attributes=True)


@router.get("/analytics/authors", response_model=list[AuthorStatsResponse])
async def get_popular_authors(
    limit: int = Query(10, ge=1, le=100),
    service: QuoteService = Depends(get_quote_service),
) -> list[AuthorStatsResponse]:
    authors = await service.get_popular_authors(limit)
    return [AuthorStatsResponse.model_validate(a, from_attributes=True) for a in authors]


@router.get("/insights/patterns", response_model=PatternReportResponse)
async def discover_patterns(
    pattern_type: PatternType = Query(PatternType.ENGAGEMENT),
    time_range: TimeRange = Query(TimeRange.LAST_WEEK),
    service: QuoteService = Depends(get_quote_service),
) -> PatternReportResponse:
    """Engagement, sentiment, length, author or tag insights with advice."""
    report = await service.discover_patterns(pattern_type, time_range)
    return PatternReportResponse.model_validate(report, from_attributes=True)
