"""FastAPI dependency injection — wires infrastructure to application layer.

Stores, the activity log and the broadcaster are process-wide singletons;
services are cheap and built per request around them.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache

from quotes_api.config import get_settings
from quotes_api.application.interfaces import (
    EngagementRepository,
    QuoteFetcher,
    QuoteRepository,
    RandomSource,
)
from quotes_api.application.services import (
    ActivityBroadcaster,
    ActivityLog,
    QuoteService,
)
from quotes_api.infrastructure.external import QuotableQuoteFetcher
from quotes_api.infrastructure.persistence import (
    InMemoryEngagementRepository,
    InMemoryQuoteRepository,
)
from quotes_api.infrastructure.random_source import StdlibRandomSource


@lru_cache
def get_random_source() -> RandomSource:
    return StdlibRandomSource()


@lru_cache
def get_quote_repository() -> QuoteRepository:
    return InMemoryQuoteRepository(get_random_source())


@lru_cache
def get_engagement_repository() -> EngagementRepository:
    return InMemoryEngagementRepository()


@lru_cache
def get_quote_fetcher() -> QuoteFetcher:
    settings = get_settings()
    return QuotableQuoteFetcher(
        quotable_url=settings.quotable_url,
        fallback_url=settings.dummyjson_url,
        timeout=settings.external_api_timeout,
    )


@lru_cache
def get_activity_broadcaster() -> ActivityBroadcaster:
    return ActivityBroadcaster()


@lru_cache
def get_activity_log() -> ActivityLog:
    """Shared activity log; every appended event is fanned out by the broadcaster."""
    activity_log = ActivityLog()
    activity_log.add_listener(get_activity_broadcaster().handle_activity)
    return activity_log


def build_quote_service() -> QuoteService:
    settings = get_settings()
    return QuoteService(
        quote_repository=get_quote_repository(),
        engagement_repository=get_engagement_repository(),
        quote_fetcher=get_quote_fetcher(),
        activity_log=get_activity_log(),
        random_source=get_random_source(),
        broadcaster=get_activity_broadcaster(),
        refresh_probability=settings.refresh_probability,
        prioritize_probability=settings.prioritize_probability,
        share_base_url=settings.share_base_url,
    )


async def get_quote_service() -> AsyncGenerator[QuoteService, None]:
    """Provides a QuoteService wired to the shared in-memory stores."""
    yield build_quote_service()


async def get_broadcaster() -> AsyncGenerator[ActivityBroadcaster, None]:
    yield get_activity_broadcaster()
