"""Ranking & aggregation engine — popularity, trending and analytics views.

Every figure here is derived on demand from the quote store and the activity
log; nothing is cached, so results always reflect the current likes and
events. Aggregations never fail: an empty store or log yields zeros and
empty lists.
"""

import logging
from collections import Counter
from collections.abc import Callable
from datetime import datetime, timezone

from quotes_api.application.interfaces import QuoteRepository
from quotes_api.application.services.activity_log import ActivityLog
from quotes_api.domain.entities import (
    ActivityType,
    AnalyticsDashboard,
    AnalyticsSummary,
    AuthorStats,
    DashboardOverview,
    EngagementBucket,
    PatternInsight,
    PatternReport,
    PatternType,
    Quote,
    QuoteWithStats,
    TagStats,
    TimeRange,
)

logger = logging.getLogger(__name__)

POPULARITY_DIVISOR = 10
TRENDING_DIVISOR = 5
TRENDING_SCORE_RANGE = TimeRange.LAST_DAY

DEFAULT_ANALYTICS_LIMIT = 10
SUMMARY_LIMIT = 5
MAX_TOP_TAGS = 10
SUMMARY_RECENT_EVENTS = 10
DASHBOARD_RECENT_EVENTS = 20
ENGAGEMENT_BUCKETS = 24

POSITIVE_WORDS = (
    "love", "happy", "joy", "success", "beautiful", "amazing",
    "wonderful", "great", "excellent", "fantastic",
)
NEGATIVE_WORDS = (
    "hate", "sad", "pain", "failure", "ugly", "terrible",
    "awful", "horrible", "bad", "worst",
)

_PATTERN_ADVICE: dict[PatternType, list[str]] = {
    PatternType.ENGAGEMENT: [
        "Consider posting new quotes during peak engagement hours",
        "Focus on quotes that generate discussion and interaction",
    ],
    PatternType.SENTIMENT: [
        "Balance positive and inspirational content with thought-provoking quotes",
        "Consider the emotional impact of quote selection",
    ],
    PatternType.LENGTH: [
        "Optimize quote length for better engagement",
        "Test different quote lengths to find the sweet spot",
    ],
    PatternType.AUTHOR: [
        "Feature more quotes from the most engaging authors",
        "Introduce lesser-known authors alongside the favorites",
    ],
    PatternType.TAGS: [
        "Use the most common tags to organise themed collections",
        "Tag new quotes consistently so they surface in recommendations",
    ],
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def popularity_score(like_count: int) -> float:
    """Saturating linear score: 10 or more likes maps to 1.0."""
    return min(like_count / POPULARITY_DIVISOR, 1.0)


def _average(values: list[int]) -> float:
    return sum(values) / len(values) if values else 0.0


class RankingService:
    """Derives stats and rankings from the QuoteRepository and ActivityLog."""

    def __init__(
        self,
        quote_repository: QuoteRepository,
        activity_log: ActivityLog,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._quotes = quote_repository
        self._activity = activity_log
        self._clock = clock

    # ── Per-quote scores ──

    def trending_score(self, quote_id: str) -> float:
        """Likes logged in the last 24h, saturating at 5."""
        cutoff = TRENDING_SCORE_RANGE.cutoff(self._clock())
        recent_likes = self._activity.events(
            event_type=ActivityType.QUOTE_LIKED, since=cutoff, quote_id=quote_id
        )
        return min(len(recent_likes) / TRENDING_DIVISOR, 1.0)

    async def enrich(self, quote: Quote, user_id: str | None = None) -> QuoteWithStats:
        """Attach live like count, user flag, popularity and trending scores."""
        likes = await self._quotes.get_likes(quote.id)
        liked = False
        if user_id:
            liked = await self._quotes.get_user_like(quote.id, user_id) is not None
        return QuoteWithStats.from_quote(
            quote,
            likes=len(likes),
            liked_by_current_user=liked,
            popularity_score=popularity_score(len(likes)),
            trending_score=self.trending_score(quote.id),
        )

    async def enrich_many(
        self, quotes: list[Quote], user_id: str | None = None
    ) -> list[QuoteWithStats]:
        return [await self.enrich(quote, user_id) for quote in quotes]

    # ── Like-count rankings ──

    async def like_count(self, quote_id: str) -> int:
        return len(await self._quotes.get_likes(quote_id))

    async def rank_by_likes(self, quotes: list[Quote]) -> list[tuple[Quote, int]]:
        """Pair quotes with like counts, most liked first. Stable for ties."""
        counted = [(quote, await self.like_count(quote.id)) for quote in quotes]
        counted.sort(key=lambda pair: pair[1], reverse=True)
        return counted

    async def total_likes(self) -> int:
        return sum([await self.like_count(q.id) for q in await self._quotes.get_all()])

    async def most_liked_quote(self) -> QuoteWithStats | None:
        ranked = await self.rank_by_likes(await self._quotes.get_all())
        if not ranked:
            return None
        return await self.enrich(ranked[0][0])

    # ── Trending & aggregates ──

    async def trending_quotes(
        self,
        limit: int = DEFAULT_ANALYTICS_LIMIT,
        time_range: TimeRange = TimeRange.LAST_DAY,
    ) -> list[QuoteWithStats]:
        """Quotes with the most likes logged inside the window.

        Ties keep the order in which quotes were first liked in the log.
        Quotes no longer in the store are skipped.
        """
        cutoff = time_range.cutoff(self._clock())
        counts: Counter[str] = Counter(
            event.quote_id
            for event in self._activity.events(event_type=ActivityType.QUOTE_LIKED, since=cutoff)
        )
        top_ids = [quote_id for quote_id, _ in counts.most_common(limit)]
        quotes = await self._quotes.get_by_ids(top_ids)
        return await self.enrich_many(quotes)

    async def popular_authors(self, limit: int = DEFAULT_ANALYTICS_LIMIT) -> list[AuthorStats]:
        stats: dict[str, AuthorStats] = {}
        for quote in await self._quotes.get_all():
            entry = stats.setdefault(quote.author, AuthorStats(author=quote.author))
            entry.quote_count += 1
            entry.total_likes += await self.like_count(quote.id)

        for entry in stats.values():
            entry.average_likes = entry.total_likes / entry.quote_count
        ranked = sorted(stats.values(), key=lambda s: s.total_likes, reverse=True)
        return ranked[:limit]

    async def top_tags(self, limit: int = MAX_TOP_TAGS) -> list[TagStats]:
        stats: dict[str, TagStats] = {}
        total_likes: Counter[str] = Counter()
        for quote in await self._quotes.get_all():
            likes = await self.like_count(quote.id)
            for tag in quote.tags:
                stats.setdefault(tag, TagStats(tag=tag)).count += 1
                total_likes[tag] += likes

        for tag, entry in stats.items():
            entry.average_likes = total_likes[tag] / entry.count
        ranked = sorted(stats.values(), key=lambda s: s.count, reverse=True)
        return ranked[: min(limit, MAX_TOP_TAGS)]

    def likes_over_time(self, time_range: TimeRange = TimeRange.LAST_DAY) -> list[EngagementBucket]:
        """Split the range into 24 equal buckets and count likes in each.

        An unbounded range starts at the oldest logged event.
        """
        now = self._clock()
        start = time_range.cutoff(now)
        if start is None:
            start = min(self._activity.oldest_timestamp() or now, now)
        interval = (now - start) / ENGAGEMENT_BUCKETS

        counts = [0] * ENGAGEMENT_BUCKETS
        for event in self._activity.events(event_type=ActivityType.QUOTE_LIKED, since=start):
            if interval.total_seconds() > 0:
                index = int((event.timestamp - start) / interval)
            else:
                index = ENGAGEMENT_BUCKETS - 1
            counts[min(index, ENGAGEMENT_BUCKETS - 1)] += 1

        return [
            EngagementBucket(timestamp=start + interval * i, count=count)
            for i, count in enumerate(counts)
        ]

    # ── Pattern discovery ──

    async def discover_patterns(
        self,
        pattern_type: PatternType = PatternType.ENGAGEMENT,
        time_range: TimeRange = TimeRange.LAST_WEEK,
    ) -> PatternReport:
        insights: list[PatternInsight] = []

        if pattern_type == PatternType.ENGAGEMENT:
            insights.append(self._engagement_insight(time_range))
        elif pattern_type == PatternType.SENTIMENT:
            insights.append(self._sentiment_insight(await self._quotes.get_all()))
        elif pattern_type == PatternType.LENGTH:
            insights.append(await self._length_insight(await self._quotes.get_all()))
        elif pattern_type == PatternType.AUTHOR:
            authors = await self.popular_authors(limit=1)
            if authors:
                top = authors[0]
                insights.append(PatternInsight(
                    title="Most Engaging Author",
                    description=(
                        f"{top.author} leads with {top.total_likes} likes "
                        f"across {top.quote_count} quotes"
                    ),
                    confidence=0.8,
                    data={
                        "author": top.author,
                        "quote_count": top.quote_count,
                        "total_likes": top.total_likes,
                        "average_likes": top.average_likes,
                    },
                ))
        elif pattern_type == PatternType.TAGS:
            tags = await self.top_tags()
            if tags:
                insights.append(PatternInsight(
                    title="Most Common Tag",
                    description=f"'{tags[0].tag}' appears on {tags[0].count} quotes",
                    confidence=0.75,
                    data={"tags": [{"tag": t.tag, "count": t.count} for t in tags]},
                ))

        return PatternReport(
            pattern_type=pattern_type,
            insights=insights,
            recommendations=list(_PATTERN_ADVICE[pattern_type]),
            generated_at=self._clock(),
        )

    def _engagement_insight(self, time_range: TimeRange) -> PatternInsight:
        cutoff = time_range.cutoff(self._clock())
        likes = self._activity.events(event_type=ActivityType.QUOTE_LIKED, since=cutoff)

        hourly_counts = [0] * 24
        for event in likes:
            hourly_counts[event.timestamp.astimezone(timezone.utc).hour] += 1
        peak_hour = hourly_counts.index(max(hourly_counts))

        return PatternInsight(
            title="Peak Engagement Hours",
            description=f"Most activity occurs between {peak_hour}:00-{peak_hour + 1}:00 UTC",
            confidence=0.85,
            data={
                "hourly_counts": hourly_counts,
                "peak_hour": peak_hour,
                "total_events": len(likes),
            },
        )

    @staticmethod
    def classify_sentiment(content: str) -> str:
        """'positive', 'negative' or 'neutral' by which word list matches more."""
        text = content.lower()
        positive = sum(1 for word in POSITIVE_WORDS if word in text)
        negative = sum(1 for word in NEGATIVE_WORDS if word in text)
        if positive > negative:
            return "positive"
        if negative > positive:
            return "negative"
        return "neutral"

    def _sentiment_insight(self, quotes: list[Quote]) -> PatternInsight:
        labels = Counter(self.classify_sentiment(q.content) for q in quotes)
        total = len(quotes)
        positive_pct = labels["positive"] / total * 100 if total else 0.0
        negative_pct = labels["negative"] / total * 100 if total else 0.0

        return PatternInsight(
            title="Content Sentiment Trends",
            description=f"{positive_pct:.1f}% of quotes have positive sentiment",
            confidence=0.72,
            data={
                "positive_count": labels["positive"],
                "negative_count": labels["negative"],
                "neutral_count": labels["neutral"],
                "positive_percentage": positive_pct,
                "negative_percentage": negative_pct,
            },
        )

    async def _length_insight(self, quotes: list[Quote]) -> PatternInsight:
        lengths = [q.effective_length for q in quotes]
        liked_lengths = [
            q.effective_length for q in quotes if await self.like_count(q.id) > 0
        ]
        average_length = _average(lengths)
        optimal_length = _average(liked_lengths) if liked_lengths else average_length

        return PatternInsight(
            title="Optimal Quote Length",
            description=f"Most liked quotes average {optimal_length:.0f} characters",
            confidence=0.78,
            data={
                "average_length": average_length,
                "optimal_length": optimal_length,
                "min_length": min(lengths, default=0),
                "max_length": max(lengths, default=0),
                "total_quotes": len(quotes),
            },
        )

    # ── Composite views ──

    async def summary(self) -> AnalyticsSummary:
        return AnalyticsSummary(
            total_quotes=await self._quotes.count(),
            total_likes=await self.total_likes(),
            most_liked_quote=await self.most_liked_quote(),
            trending_quotes=await self.trending_quotes(SUMMARY_LIMIT),
            popular_authors=await self.popular_authors(SUMMARY_LIMIT),
            recent_activity=self._activity.recent(SUMMARY_RECENT_EVENTS),
        )

    async def dashboard(
        self, time_range: TimeRange = TimeRange.LAST_DAY, *, total_users: int = 0
    ) -> AnalyticsDashboard:
        cutoff = time_range.cutoff(self._clock())
        total_quotes = await self._quotes.count()
        total_likes = await self.total_likes()
        quotes_added = len(
            self._activity.events(event_type=ActivityType.NEW_QUOTE_ADDED, since=cutoff)
        )

        overview = DashboardOverview(
            total_quotes=total_quotes,
            total_likes=total_likes,
            total_users=total_users,
            average_likes_per_quote=total_likes / total_quotes if total_quotes else 0.0,
            quotes_added_in_range=quotes_added,
        )
        return AnalyticsDashboard(
            time_range=time_range,
            overview=overview,
            most_liked_quotes=await self.trending_quotes(SUMMARY_LIMIT, time_range),
            popular_authors=await self.popular_authors(SUMMARY_LIMIT),
            likes_over_time=self.likes_over_time(time_range),
            top_tags=await self.top_tags(),
            recent_activity=self._activity.recent(DASHBOARD_RECENT_EVENTS, since=cutoff),
        )
