"""Domain entities for recommendations, quote comparison and live feeds."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .activity import ActivityEvent
from .quote import Quote, QuoteWithStats


class RecommendationAlgorithm(str, Enum):
    COLLABORATIVE = "collaborative"
    CONTENT_BASED = "content-based"
    TRENDING = "trending"
    HYBRID = "hybrid"


@dataclass
class ScoredQuote:
    """A candidate quote scored by one recommendation strategy."""

    quote: Quote
    score: float
    confidence: float
    reason: str


@dataclass
class Recommendation:
    quote: QuoteWithStats
    score: float
    confidence: float
    reason: str | None = None


@dataclass
class RecommendationResult:
    algorithm: RecommendationAlgorithm
    reason: str
    recommendations: list[Recommendation] = field(default_factory=list)


# ── Comparison ───────────────────────────────────────────────────────


@dataclass
class SimilarityEntry:
    """Similarity between one unordered pair of compared quotes."""

    quote_ids: tuple[str, str]
    score: float
    description: str
    field: str = "content"


@dataclass
class DifferenceEntry:
    field: str
    values: list[str]
    description: str


@dataclass
class ComparisonMetrics:
    average_length: float
    average_likes: float
    common_tags: list[str]
    author_diversity: float


@dataclass
class QuoteComparison:
    quotes: list[Quote]
    similarities: list[SimilarityEntry]
    differences: list[DifferenceEntry]
    recommendation: str
    overall_similarity: float
    metrics: ComparisonMetrics | None = None


# ── Live feed ────────────────────────────────────────────────────────


class FeedType(str, Enum):
    TRENDING = "trending"
    RECENT = "recent"
    POPULAR = "popular"
    PERSONALIZED = "personalized"


@dataclass
class FeedItem:
    quote: QuoteWithStats
    relevance_score: float
    activity: ActivityEvent | None = None


@dataclass
class LiveFeed:
    feed_type: FeedType
    items: list[FeedItem]
    last_updated: datetime
    next_update: datetime
