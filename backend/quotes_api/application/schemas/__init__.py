from .activity import ActivityEventResponse
from .analytics import (
    AnalyticsDashboardResponse,
    AnalyticsSummaryResponse,
    AuthorStatsResponse,
    DashboardOverviewResponse,
    EngagementBucketResponse,
    PatternInsightResponse,
    PatternReportResponse,
    TagStatsResponse,
)
from .collection import (
    CollectionCreate,
    CollectionQuoteAdd,
    CollectionResponse,
    PreferencesResponse,
    PreferencesUpdate,
)
from .quote import (
    CompareRequest,
    QuoteComparisonResponse,
    QuoteFilterSchema,
    QuoteListRequest,
    QuoteResponse,
    QuoteSortSchema,
    QuoteWithStatsResponse,
    ReportRequest,
    ShareResponse,
    SuccessResponse,
    UserActionRequest,
)
from .recommendation import (
    FeedItemResponse,
    LiveFeedResponse,
    RecommendationResponse,
    RecommendationResultResponse,
)

__all__ = [
    "ActivityEventResponse",
    "AnalyticsDashboardResponse",
    "AnalyticsSummaryResponse",
    "AuthorStatsResponse",
    "DashboardOverviewResponse",
    "EngagementBucketResponse",
    "PatternInsightResponse",
    "PatternReportResponse",
    "TagStatsResponse",
    "CollectionCreate",
    "CollectionQuoteAdd",
    "CollectionResponse",
    "PreferencesResponse",
    "PreferencesUpdate",
    "CompareRequest",
    "QuoteComparisonResponse",
    "QuoteFilterSchema",
    "QuoteListRequest",
    "QuoteResponse",
    "QuoteSortSchema",
    "QuoteWithStatsResponse",
    "ReportRequest",
    "ShareResponse",
    "SuccessResponse",
    "UserActionRequest",
    "FeedItemResponse",
    "LiveFeedResponse",
    "RecommendationResponse",
    "RecommendationResultResponse",
]
