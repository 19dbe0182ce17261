"""Quote service — facade orchestrating retrieval, likes, analytics and user features.

Retrieval follows a small probabilistic policy:
  1. Pick a stored quote; when the store is empty, or with the configured
     refresh probability, pull a fresh quote from upstream and store it.
  2. For identified users, swap in one of the five most-liked quotes with the
     configured prioritization probability.
"""

import logging
from datetime import datetime, timedelta, timezone
from itertools import combinations
from uuid import uuid4

from quotes_api.application.interfaces import (
    EngagementRepository,
    QuoteFetcher,
    QuoteRepository,
    RandomSource,
)
from quotes_api.application.services.activity_broadcaster import (
    TRENDING_TOPIC,
    ActivityBroadcaster,
)
from quotes_api.application.services.activity_log import ActivityLog
from quotes_api.application.services.ranking_service import (
    DEFAULT_ANALYTICS_LIMIT,
    RankingService,
)
from quotes_api.application.services.recommendation_service import (
    DEFAULT_RECOMMENDATION_LIMIT,
    RecommendationService,
    preference_score,
)
from quotes_api.application.services.similarity_scorer import similarity, similarity_label
from quotes_api.domain.entities import (
    ActivityEvent,
    ActivityType,
    AnalyticsDashboard,
    AnalyticsSummary,
    AuthorStats,
    ComparisonMetrics,
    DifferenceEntry,
    FeedItem,
    FeedType,
    LiveFeed,
    PatternReport,
    PatternType,
    Quote,
    QuoteCollection,
    QuoteComparison,
    QuoteFilter,
    QuoteLike,
    QuoteReport,
    QuoteSort,
    QuoteWithStats,
    RecommendationAlgorithm,
    RecommendationResult,
    SimilarityEntry,
    SortDirection,
    SortField,
    TimeRange,
    UserPreferences,
)
from quotes_api.domain.exceptions import (
    CollectionNotFoundError,
    ExternalApiError,
    InsufficientQuotesError,
    QuoteFetchError,
    QuoteNotFoundError,
)
from quotes_api.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("QuoteService")

PRIORITIZED_POOL_SIZE = 5
LENGTH_DIFFERENCE_THRESHOLD = 50
DEFAULT_FEED_LIMIT = 10
FEED_REFRESH_INTERVAL = timedelta(minutes=5)
BASE_RELEVANCE = 0.5


class QuoteService:
    """Root application service. All state lives in the injected stores."""

    def __init__(
        self,
        quote_repository: QuoteRepository,
        engagement_repository: EngagementRepository,
        quote_fetcher: QuoteFetcher,
        activity_log: ActivityLog,
        random_source: RandomSource,
        *,
        broadcaster: ActivityBroadcaster | None = None,
        ranking_service: RankingService | None = None,
        recommendation_service: RecommendationService | None = None,
        refresh_probability: float = 0.3,
        prioritize_probability: float = 0.7,
        share_base_url: str = "https://quotes-service.com/share",
    ):
        self._quotes = quote_repository
        self._engagement = engagement_repository
        self._fetcher = quote_fetcher
        self._activity = activity_log
        self._random = random_source
        self._broadcaster = broadcaster
        self._ranking = ranking_service or RankingService(quote_repository, activity_log)
        self._recommender = recommendation_service or RecommendationService(
            quote_repository, self._ranking
        )
        self._refresh_probability = refresh_probability
        self._prioritize_probability = prioritize_probability
        self._share_base_url = share_base_url.rstrip("/")

    # ── Retrieval ────────────────────────────────────────────────────

    async def get_random_quote(self, user_id: str | None = None) -> QuoteWithStats:
        quote = await self._quotes.get_random_quote()
        plog.detail("Store pick", quote_id=quote.id if quote else None)

        if quote is None or self._random.random() < self._refresh_probability:
            plog.step_start(PipelineStage.UPSTREAM, "Fetching fresh quote", source=self._fetcher.source_name)
            try:
                fetched = await self._fetcher.fetch_random_quote()
            except QuoteFetchError as e:
                plog.step_error(PipelineStage.UPSTREAM, "Upstream fetch failed", error=e)
                if quote is None:
                    raise ExternalApiError() from e
            else:
                if await self._quotes.get_by_id(fetched.id) is None:
                    await self._quotes.save(fetched)
                    self._activity.record(ActivityType.NEW_QUOTE_ADDED, fetched.id)
                    plog.step_complete(PipelineStage.UPSTREAM, "Stored upstream quote", quote_id=fetched.id)
                else:
                    plog.step_complete(PipelineStage.UPSTREAM, "Upstream quote already stored", quote_id=fetched.id)
                quote = fetched

        prioritized = await self._prioritized_quote(user_id)
        if prioritized is not None and self._random.random() < self._prioritize_probability:
            plog.step_complete(PipelineStage.PRIORITIZE, "Prioritized quote substituted", quote_id=prioritized.id)
            quote = prioritized

        return await self._ranking.enrich(quote, user_id)

    async def _prioritized_quote(self, user_id: str | None) -> Quote | None:
        """Uniform pick among the five most-liked quotes, for identified users only."""
        if not user_id:
            return None
        ranked = await self._ranking.rank_by_likes(await self._quotes.get_all())
        pool = [quote for quote, _ in ranked[:PRIORITIZED_POOL_SIZE]]
        if not pool:
            return None
        return self._random.choice(pool)

    async def get_quote(self, quote_id: str, user_id: str | None = None) -> QuoteWithStats | None:
        quote = await self._quotes.get_by_id(quote_id)
        if quote is None:
            return None
        return await self._ranking.enrich(quote, user_id)

    async def get_similar_quotes(
        self, quote_id: str, limit: int = 5, user_id: str | None = None
    ) -> list[QuoteWithStats]:
        """Most similar stored quotes, best first. Unknown target yields []."""
        target = await self._quotes.get_by_id(quote_id)
        if target is None:
            return []
        scored = [
            (quote, similarity(target, quote))
            for quote in await self._quotes.get_all()
            if quote.id != quote_id
        ]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return await self._ranking.enrich_many([q for q, _ in scored[:limit]], user_id)

    async def search_quotes(
        self, query: str | None = None, limit: int = 10, user_id: str | None = None
    ) -> list[QuoteWithStats]:
        """Substring match on content, author and tags; ranked by like count."""
        quotes = await self._quotes.get_all()
        term = (query or "").lower()
        if term:
            quotes = [
                q for q in quotes
                if term in q.content.lower()
                or term in q.author.lower()
                or any(term in tag.lower() for tag in q.tags)
            ]
        ranked = await self._ranking.rank_by_likes(quotes)
        return await self._ranking.enrich_many([q for q, _ in ranked[:limit]], user_id)

    async def get_quotes_with_filter(
        self,
        quote_filter: QuoteFilter | None = None,
        sort: QuoteSort | None = None,
        limit: int = 10,
        offset: int = 0,
        user_id: str | None = None,
    ) -> list[QuoteWithStats]:
        quotes = await self._quotes.get_all()

        if quote_filter is not None:
            if quote_filter.author:
                needle = quote_filter.author.lower()
                quotes = [q for q in quotes if needle in q.author.lower()]
            if quote_filter.tags:
                wanted = [t.lower() for t in quote_filter.tags]
                quotes = [
                    q for q in quotes
                    if any(w in tag.lower() for w in wanted for tag in q.tags)
                ]
            if quote_filter.min_length is not None:
                quotes = [q for q in quotes if q.effective_length >= quote_filter.min_length]
            if quote_filter.max_length is not None:
                quotes = [q for q in quotes if q.effective_length <= quote_filter.max_length]
            if quote_filter.min_likes is not None:
                quotes = [
                    q for q in quotes
                    if await self._ranking.like_count(q.id) >= quote_filter.min_likes
                ]

        if sort is not None:
            reverse = sort.direction == SortDirection.DESC
            if sort.field == SortField.LIKES:
                ranked = await self._ranking.rank_by_likes(quotes)
                if not reverse:
                    ranked.sort(key=lambda pair: pair[1])
                quotes = [q for q, _ in ranked]
            elif sort.field == SortField.AUTHOR:
                quotes.sort(key=lambda q: q.author.lower(), reverse=reverse)
            elif sort.field == SortField.LENGTH:
                quotes.sort(key=lambda q: q.effective_length, reverse=reverse)

        return await self._ranking.enrich_many(quotes[offset : offset + limit], user_id)

    # ── Likes ────────────────────────────────────────────────────────

    async def like_quote(self, quote_id: str, user_id: str) -> None:
        """Idempotent: liking twice leaves a single like and logs a single event."""
        if await self._quotes.get_by_id(quote_id) is None:
            raise QuoteNotFoundError(quote_id)

        added = await self._quotes.add_like(QuoteLike(quote_id=quote_id, user_id=user_id))
        if not added:
            return

        preferences = await self.get_user_preferences(user_id)
        preferences.remember_like(quote_id)
        await self._engagement.save_preferences(preferences)

        self._activity.record(ActivityType.QUOTE_LIKED, quote_id, user_id)
        await self._publish_trending_update()

    async def unlike_quote(self, quote_id: str, user_id: str) -> None:
        """Idempotent: unliking a quote that is not liked does nothing."""
        removed = await self._quotes.remove_like(quote_id, user_id)
        if not removed:
            return

        preferences = await self._engagement.get_preferences(user_id)
        if preferences is not None:
            preferences.forget_like(quote_id)
            await self._engagement.save_preferences(preferences)

        self._activity.record(ActivityType.QUOTE_UNLIKED, quote_id, user_id)

    async def _publish_trending_update(self) -> None:
        if self._broadcaster is None or not self._broadcaster.subscriber_count(TRENDING_TOPIC):
            return
        trending = await self._ranking.trending_quotes()
        self._broadcaster.publish(
            TRENDING_TOPIC,
            "TRENDING_QUOTES_UPDATED",
            {"quotes": [{"id": q.id, "likes": q.likes, "trending_score": q.trending_score} for q in trending]},
        )

    # ── Analytics ────────────────────────────────────────────────────

    async def get_analytics(self) -> AnalyticsSummary:
        return await self._ranking.summary()

    async def get_analytics_dashboard(
        self, time_range: TimeRange = TimeRange.LAST_DAY
    ) -> AnalyticsDashboard:
        return await self._ranking.dashboard(
            time_range, total_users=await self._engagement.count_users()
        )

    async def get_trending_quotes(
        self,
        limit: int = DEFAULT_ANALYTICS_LIMIT,
        time_range: TimeRange = TimeRange.LAST_DAY,
    ) -> list[QuoteWithStats]:
        return await self._ranking.trending_quotes(limit, time_range)

    async def get_popular_authors(self, limit: int = DEFAULT_ANALYTICS_LIMIT) -> list[AuthorStats]:
        return await self._ranking.popular_authors(limit)

    async def discover_patterns(
        self,
        pattern_type: PatternType = PatternType.ENGAGEMENT,
        time_range: TimeRange = TimeRange.LAST_WEEK,
    ) -> PatternReport:
        return await self._ranking.discover_patterns(pattern_type, time_range)

    # ── Collections ──────────────────────────────────────────────────

    async def get_user_collections(self, user_id: str) -> list[QuoteCollection]:
        return await self._engagement.list_collections(user_id)

    async def get_collection(self, collection_id: str, user_id: str) -> QuoteCollection:
        collection = await self._engagement.get_collection(collection_id)
        if collection is None or not collection.is_owned_by(user_id):
            raise CollectionNotFoundError(collection_id)
        return collection

    async def create_collection(
        self,
        name: str,
        user_id: str,
        description: str | None = None,
        is_public: bool = False,
    ) -> QuoteCollection:
        collection = QuoteCollection(
            name=name, user_id=user_id, description=description, is_public=is_public
        )
        logger.info("Collection '%s' created for user '%s'", collection.id, user_id)
        return await self._engagement.save_collection(collection)

    async def add_quote_to_collection(
        self, collection_id: str, quote_id: str, user_id: str
    ) -> QuoteCollection:
        collection = await self.get_collection(collection_id, user_id)
        quote = await self._quotes.get_by_id(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        if collection.add_quote(quote):
            await self._engagement.save_collection(collection)
        return collection

    async def remove_quote_from_collection(
        self, collection_id: str, quote_id: str, user_id: str
    ) -> QuoteCollection:
        collection = await self.get_collection(collection_id, user_id)
        collection.remove_quote(quote_id)
        return await self._engagement.save_collection(collection)

    async def delete_collection(self, collection_id: str, user_id: str) -> None:
        await self.get_collection(collection_id, user_id)
        await self._engagement.delete_collection(collection_id)

    # ── Preferences ──────────────────────────────────────────────────

    async def get_user_preferences(self, user_id: str) -> UserPreferences:
        """Return the user's preferences, creating empty ones on first access."""
        preferences = await self._engagement.get_preferences(user_id)
        if preferences is None:
            preferences = await self._engagement.save_preferences(UserPreferences(user_id=user_id))
        return preferences

    async def update_user_preferences(
        self,
        user_id: str,
        favorite_authors: list[str] | None = None,
        favorite_tags: list[str] | None = None,
    ) -> UserPreferences:
        preferences = await self.get_user_preferences(user_id)
        preferences.update(favorite_authors=favorite_authors, favorite_tags=favorite_tags)
        return await self._engagement.save_preferences(preferences)

    # ── Comparison ───────────────────────────────────────────────────

    async def compare_quotes(
        self, quote_ids: list[str], include_metrics: bool = True
    ) -> QuoteComparison:
        quotes = await self._quotes.get_by_ids(quote_ids)
        if len(quotes) < 2:
            raise InsufficientQuotesError(found=len(quotes))

        similarities = []
        for a, b in combinations(quotes, 2):
            score = similarity(a, b)
            similarities.append(SimilarityEntry(
                quote_ids=(a.id, b.id),
                score=score,
                description=f"{similarity_label(score)} similarity in content and themes",
            ))
        overall = sum(s.score for s in similarities) / len(similarities)

        return QuoteComparison(
            quotes=quotes,
            similarities=similarities,
            differences=self._quote_differences(quotes),
            recommendation=self._comparison_advice(overall),
            overall_similarity=overall,
            metrics=await self._comparison_metrics(quotes) if include_metrics else None,
        )

    @staticmethod
    def _quote_differences(quotes: list[Quote]) -> list[DifferenceEntry]:
        differences = []

        authors = list(dict.fromkeys(q.author for q in quotes))
        if len(authors) > 1:
            differences.append(DifferenceEntry(
                field="author",
                values=authors,
                description=f"Quotes from {len(authors)} different authors",
            ))

        lengths = [q.effective_length for q in quotes]
        shortest, longest = min(lengths), max(lengths)
        if longest - shortest > LENGTH_DIFFERENCE_THRESHOLD:
            differences.append(DifferenceEntry(
                field="length",
                values=[f"{length} chars" for length in lengths],
                description=(
                    f"Significant variation in quote lengths ({shortest}-{longest} characters)"
                ),
            ))

        return differences

    @staticmethod
    def _comparison_advice(average_similarity: float) -> str:
        if average_similarity > 0.7:
            return "These quotes are very similar and would work well together in a themed collection."
        if average_similarity > 0.4:
            return (
                "These quotes have moderate similarities and could complement each other "
                "in a diverse collection."
            )
        return "These quotes are quite different and would provide good variety in a collection."

    async def _comparison_metrics(self, quotes: list[Quote]) -> ComparisonMetrics:
        lengths = [q.effective_length for q in quotes]
        likes = [await self._ranking.like_count(q.id) for q in quotes]
        unique_tags = list(dict.fromkeys(tag for q in quotes for tag in q.tags))
        authors = {q.author for q in quotes}
        return ComparisonMetrics(
            average_length=sum(lengths) / len(lengths),
            average_likes=sum(likes) / len(likes),
            common_tags=[
                tag for tag in unique_tags if sum(1 for q in quotes if tag in q.tags) > 1
            ],
            author_diversity=len(authors) / len(quotes),
        )

    # ── Recommendations & feeds ──────────────────────────────────────

    async def get_smart_recommendations(
        self,
        user_id: str,
        limit: int = DEFAULT_RECOMMENDATION_LIMIT,
        algorithm: RecommendationAlgorithm = RecommendationAlgorithm.HYBRID,
        include_explanation: bool = True,
    ) -> RecommendationResult:
        preferences = await self.get_user_preferences(user_id)
        return await self._recommender.recommend(
            preferences,
            limit=limit,
            algorithm=algorithm,
            include_explanation=include_explanation,
        )

    async def get_quote_history(self, user_id: str, limit: int = 20) -> list[QuoteWithStats]:
        """Quotes the user interacted with, most recent interaction first."""
        events = sorted(
            self._activity.events(user_id=user_id),
            key=lambda e: e.timestamp,
            reverse=True,
        )[:limit]
        quote_ids = list(dict.fromkeys(e.quote_id for e in events))
        quotes = await self._quotes.get_by_ids(quote_ids)
        return await self._ranking.enrich_many(quotes)

    async def get_live_feed(
        self,
        user_id: str | None = None,
        limit: int = DEFAULT_FEED_LIMIT,
        feed_type: FeedType = FeedType.PERSONALIZED,
        include_activity: bool = True,
    ) -> LiveFeed:
        if feed_type == FeedType.TRENDING:
            trending = await self._ranking.trending_quotes(limit)
            quotes = await self._quotes.get_by_ids([q.id for q in trending])
        elif feed_type == FeedType.POPULAR:
            ranked = await self._ranking.rank_by_likes(await self._quotes.get_all())
            quotes = [q for q, _ in ranked[:limit]]
        elif feed_type == FeedType.PERSONALIZED and user_id:
            result = await self.get_smart_recommendations(
                user_id, limit, RecommendationAlgorithm.HYBRID, include_explanation=False
            )
            quotes = await self._quotes.get_by_ids([r.quote.id for r in result.recommendations])
        else:
            quotes = (await self._quotes.get_all())[-limit:] if limit > 0 else []

        preferences = await self._engagement.get_preferences(user_id) if user_id else None
        items = [
            FeedItem(
                quote=await self._ranking.enrich(quote, user_id),
                relevance_score=self._relevance_score(quote, preferences),
                activity=self._activity.latest_for_quote(quote.id) if include_activity else None,
            )
            for quote in quotes
        ]

        now = datetime.now(timezone.utc)
        return LiveFeed(
            feed_type=feed_type,
            items=items,
            last_updated=now,
            next_update=now + FEED_REFRESH_INTERVAL,
        )

    @staticmethod
    def _relevance_score(quote: Quote, preferences: UserPreferences | None) -> float:
        if preferences is None:
            return BASE_RELEVANCE
        return min(BASE_RELEVANCE + preference_score(quote, preferences), 1.0)

    # ── Sharing & moderation ─────────────────────────────────────────

    async def share_quote(self, quote_id: str, user_id: str) -> str:
        """Create a share link for the quote and return its URL."""
        if await self._quotes.get_by_id(quote_id) is None:
            raise QuoteNotFoundError(quote_id)

        share_id = uuid4().hex[:12]
        await self._engagement.save_share_link(share_id, quote_id)
        self._activity.record(ActivityType.QUOTE_SHARED, quote_id, user_id, details=share_id)
        return f"{self._share_base_url}/{share_id}"

    async def resolve_share_link(
        self, share_id: str, user_id: str | None = None
    ) -> QuoteWithStats | None:
        quote_id = await self._engagement.get_shared_quote_id(share_id)
        if quote_id is None:
            return None
        return await self.get_quote(quote_id, user_id)

    async def report_quote(self, quote_id: str, reason: str, user_id: str) -> bool:
        if await self._quotes.get_by_id(quote_id) is None:
            raise QuoteNotFoundError(quote_id)

        await self._engagement.add_report(QuoteReport(quote_id=quote_id, reason=reason, user_id=user_id))
        self._activity.record(ActivityType.QUOTE_REPORTED, quote_id, user_id, details=reason)
        logger.info("Quote '%s' reported by '%s'", quote_id, user_id)
        return True

    def recent_activity(self, limit: int = 20) -> list[ActivityEvent]:
        return self._activity.recent(limit)
