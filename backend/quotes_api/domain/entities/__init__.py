from .quote import (
    Quote,
    QuoteLike,
    QuoteWithStats,
    QuoteFilter,
    QuoteSort,
    SortDirection,
    SortField,
)
from .activity import ActivityEvent, ActivityType, TimeRange
from .user_preferences import UserPreferences
from .collection import QuoteCollection, QuoteReport
from .analytics import (
    AnalyticsDashboard,
    AnalyticsSummary,
    AuthorStats,
    DashboardOverview,
    EngagementBucket,
    PatternInsight,
    PatternReport,
    PatternType,
    TagStats,
)
from .recommendation import (
    ComparisonMetrics,
    DifferenceEntry,
    FeedItem,
    FeedType,
    LiveFeed,
    QuoteComparison,
    Recommendation,
    RecommendationAlgorithm,
    RecommendationResult,
    ScoredQuote,
    SimilarityEntry,
)

__all__ = [
    "Quote",
    "QuoteLike",
    "QuoteWithStats",
    "QuoteFilter",
    "QuoteSort",
    "SortDirection",
    "SortField",
    "ActivityEvent",
    "ActivityType",
    "TimeRange",
    "UserPreferences",
    "QuoteCollection",
    "QuoteReport",
    "AnalyticsDashboard",
    "AnalyticsSummary",
    "AuthorStats",
    "DashboardOverview",
    "EngagementBucket",
    "PatternInsight",
    "PatternReport",
    "PatternType",
    "TagStats",
    "ComparisonMetrics",
    "DifferenceEntry",
    "FeedItem",
    "FeedType",
    "LiveFeed",
    "QuoteComparison",
    "Recommendation",
    "RecommendationAlgorithm",
    "RecommendationResult",
    "ScoredQuote",
    "SimilarityEntry",
]
