"""Domain entities produced by the ranking & aggregation engine."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .activity import ActivityEvent, TimeRange
from .quote import QuoteWithStats


class PatternType(str, Enum):
    """Kinds of pattern discovery supported by the insights endpoint."""

    ENGAGEMENT = "engagement"
    SENTIMENT = "sentiment"
    LENGTH = "length"
    AUTHOR = "author"
    TAGS = "tags"


@dataclass
class AuthorStats:
    author: str
    quote_count: int = 0
    total_likes: int = 0
    average_likes: float = 0.0


@dataclass
class TagStats:
    tag: str
    count: int = 0
    average_likes: float = 0.0


@dataclass
class EngagementBucket:
    """Likes counted in one slice of a time-bucketed series."""

    timestamp: datetime
    count: int = 0


@dataclass
class PatternInsight:
    title: str
    description: str
    confidence: float
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class PatternReport:
    pattern_type: PatternType
    insights: list[PatternInsight] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class AnalyticsSummary:
    total_quotes: int
    total_likes: int
    most_liked_quote: QuoteWithStats | None
    trending_quotes: list[QuoteWithStats] = field(default_factory=list)
    popular_authors: list[AuthorStats] = field(default_factory=list)
    recent_activity: list[ActivityEvent] = field(default_factory=list)


@dataclass
class DashboardOverview:
    total_quotes: int
    total_likes: int
    total_users: int
    average_likes_per_quote: float
    quotes_added_in_range: int


@dataclass
class AnalyticsDashboard:
    time_range: TimeRange
    overview: DashboardOverview
    most_liked_quotes: list[QuoteWithStats] = field(default_factory=list)
    popular_authors: list[AuthorStats] = field(default_factory=list)
    likes_over_time: list[EngagementBucket] = field(default_factory=list)
    top_tags: list[TagStats] = field(default_factory=list)
    recent_activity: list[ActivityEvent] = field(default_factory=list)
