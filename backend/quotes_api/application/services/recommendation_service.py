"""Recommendation engine — collaborative, content-based, trending and hybrid strategies."""

import logging
import math

from quotes_api.application.interfaces import QuoteRepository
from quotes_api.application.services.ranking_service import RankingService
from quotes_api.application.services.similarity_scorer import similarity
from quotes_api.domain.entities import (
    Quote,
    Recommendation,
    RecommendationAlgorithm,
    RecommendationResult,
    ScoredQuote,
    UserPreferences,
)
from quotes_api.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("RecommendationService")

PREFERENCE_AUTHOR_WEIGHT = 0.3
PREFERENCE_TAG_WEIGHT = 0.2
CONTENT_SIMILARITY_WEIGHT = 0.6
TRENDING_SCORE = 0.8
TRENDING_CONFIDENCE = 0.9

DEFAULT_RECOMMENDATION_LIMIT = 5

_STRATEGY_EXPLANATIONS: dict[RecommendationAlgorithm, str] = {
    RecommendationAlgorithm.COLLABORATIVE: "Matches your favorite authors and tags",
    RecommendationAlgorithm.CONTENT_BASED: "Based on content similarity to your liked quotes",
    RecommendationAlgorithm.TRENDING: "Currently trending quotes",
}

_ALGORITHM_REASONS: dict[RecommendationAlgorithm, str] = {
    RecommendationAlgorithm.COLLABORATIVE: "Based on similar users and your preferences",
    RecommendationAlgorithm.CONTENT_BASED: "Based on content similarity to your liked quotes",
    RecommendationAlgorithm.TRENDING: "Based on current trending quotes",
    RecommendationAlgorithm.HYBRID: "Combining multiple recommendation strategies for optimal results",
}


def preference_score(quote: Quote, preferences: UserPreferences) -> float:
    """+0.3 for a favorite author, plus the favorite-tag share of the quote's tags * 0.2."""
    score = 0.0
    if quote.author in preferences.favorite_authors:
        score += PREFERENCE_AUTHOR_WEIGHT
    matching_tags = sum(1 for tag in quote.tags if tag in preferences.favorite_tags)
    score += matching_tags / max(len(quote.tags), 1) * PREFERENCE_TAG_WEIGHT
    return score


def merge_recommendations(
    first: list[ScoredQuote], second: list[ScoredQuote], limit: int
) -> list[ScoredQuote]:
    """Concatenate, drop repeated quote ids (first occurrence wins), sort by score, truncate."""
    seen: set[str] = set()
    unique: list[ScoredQuote] = []
    for item in [*first, *second]:
        if item.quote.id in seen:
            continue
        seen.add(item.quote.id)
        unique.append(item)
    unique.sort(key=lambda item: item.score, reverse=True)
    return unique[:limit]


class RecommendationService:
    """Scores candidate quotes for a user and blends strategies.

    Candidates never include quotes the user already likes, except for the
    trending strategy which reflects global activity.
    """

    def __init__(self, quote_repository: QuoteRepository, ranking_service: RankingService):
        self._quotes = quote_repository
        self._ranking = ranking_service

    async def recommend(
        self,
        preferences: UserPreferences,
        *,
        limit: int = DEFAULT_RECOMMENDATION_LIMIT,
        algorithm: RecommendationAlgorithm = RecommendationAlgorithm.HYBRID,
        include_explanation: bool = True,
    ) -> RecommendationResult:
        user_id = preferences.user_id
        plog.step_start(
            PipelineStage.RECOMMEND,
            f"Recommending for '{user_id}'",
            algorithm=algorithm.value,
            limit=limit,
        )

        if algorithm == RecommendationAlgorithm.TRENDING:
            scored = await self.trending(limit)
        else:
            all_quotes = await self._quotes.get_all()
            liked_ids = set(await self._quotes.get_liked_quote_ids(user_id))
            candidates = [q for q in all_quotes if q.id not in liked_ids]
            liked_quotes = [q for q in all_quotes if q.id in liked_ids]

            if algorithm == RecommendationAlgorithm.COLLABORATIVE:
                scored = self.collaborative(candidates, preferences, limit)
            elif algorithm == RecommendationAlgorithm.CONTENT_BASED:
                scored = self.content_based(candidates, liked_quotes, preferences, limit)
            else:
                half = math.ceil(limit / 2)
                collaborative = self.collaborative(candidates, preferences, half)
                content_based = self.content_based(candidates, liked_quotes, preferences, half)
                with plog.timed_step(PipelineStage.MERGE, "Merging strategy results"):
                    scored = merge_recommendations(collaborative, content_based, limit)

        recommendations = [
            Recommendation(
                quote=await self._ranking.enrich(item.quote, user_id),
                score=item.score,
                confidence=item.confidence,
                reason=item.reason if include_explanation else None,
            )
            for item in scored
        ]

        plog.step_complete(
            PipelineStage.RECOMMEND,
            f"{len(recommendations)} recommendation(s) for '{user_id}'",
            algorithm=algorithm.value,
        )
        return RecommendationResult(
            algorithm=algorithm,
            reason=_ALGORITHM_REASONS[algorithm],
            recommendations=recommendations,
        )

    def collaborative(
        self, candidates: list[Quote], preferences: UserPreferences, limit: int
    ) -> list[ScoredQuote]:
        plog.detail(
            "Collaborative scoring",
            candidates=len(candidates),
            authors=len(preferences.favorite_authors),
            tags=len(preferences.favorite_tags),
        )
        scored = []
        for quote in candidates:
            score = preference_score(quote, preferences)
            scored.append(ScoredQuote(
                quote=quote,
                score=score,
                confidence=min(score, 1.0),
                reason=_STRATEGY_EXPLANATIONS[RecommendationAlgorithm.COLLABORATIVE],
            ))
        scored.sort(key=lambda item: item.score, reverse=True)
        return scored[:limit]

    def content_based(
        self,
        candidates: list[Quote],
        liked_quotes: list[Quote],
        preferences: UserPreferences,
        limit: int,
    ) -> list[ScoredQuote]:
        plog.detail("Content-based scoring", candidates=len(candidates), liked=len(liked_quotes))
        scored = []
        for quote in candidates:
            score = self.average_similarity(quote, liked_quotes) * CONTENT_SIMILARITY_WEIGHT
            if quote.author in preferences.favorite_authors:
                score += PREFERENCE_AUTHOR_WEIGHT
            scored.append(ScoredQuote(
                quote=quote,
                score=score,
                confidence=min(score, 1.0),
                reason=_STRATEGY_EXPLANATIONS[RecommendationAlgorithm.CONTENT_BASED],
            ))
        scored.sort(key=lambda item: item.score, reverse=True)
        return scored[:limit]

    async def trending(self, limit: int) -> list[ScoredQuote]:
        trending = await self._ranking.trending_quotes(limit)
        quotes = await self._quotes.get_by_ids([q.id for q in trending])
        return [
            ScoredQuote(
                quote=quote,
                score=TRENDING_SCORE,
                confidence=TRENDING_CONFIDENCE,
                reason=_STRATEGY_EXPLANATIONS[RecommendationAlgorithm.TRENDING],
            )
            for quote in quotes
        ]

    @staticmethod
    def average_similarity(quote: Quote, liked_quotes: list[Quote]) -> float:
        if not liked_quotes:
            return 0.0
        return sum(similarity(quote, liked) for liked in liked_quotes) / len(liked_quotes)
