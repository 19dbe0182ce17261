"""Shared fakes and fixtures for quote service tests."""

from collections.abc import Sequence

import pytest

from quotes_api.application.interfaces import QuoteFetcher, QuoteRepository, RandomSource
from quotes_api.application.services import (
    ActivityBroadcaster,
    ActivityLog,
    QuoteService,
    RankingService,
)
from quotes_api.domain.entities import Quote
from quotes_api.domain.exceptions import QuoteFetchError
from quotes_api.infrastructure.persistence import (
    InMemoryEngagementRepository,
    InMemoryQuoteRepository,
)


class FakeRandomSource(RandomSource):
    """Replays scripted values; once exhausted, random() returns 0.99."""

    def __init__(self, values: Sequence[float] = (), choice_index: int = 0):
        self.values = list(values)
        self.choice_index = choice_index

    def random(self) -> float:
        return self.values.pop(0) if self.values else 0.99

    def choice(self, items):
        return items[min(self.choice_index, len(items) - 1)]


class FakeQuoteFetcher(QuoteFetcher):
    """Returns queued quotes in order, or raises when ``fail`` is set."""

    def __init__(self, quotes: Sequence[Quote] = (), fail: bool = False):
        self.quotes = list(quotes)
        self.fail = fail
        self.calls = 0

    @property
    def source_name(self) -> str:
        return "fake"

    async def fetch_random_quote(self) -> Quote:
        self.calls += 1
        if self.fail or not self.quotes:
            raise QuoteFetchError("fake", "upstream unavailable")
        return self.quotes.pop(0)


def make_quote(
    quote_id: str,
    content: str = "Some words of wisdom",
    author: str = "Anonymous",
    tags: list[str] | None = None,
    length: int | None = None,
) -> Quote:
    return Quote(id=quote_id, content=content, author=author, tags=tags or [], length=length)


async def store(repository: QuoteRepository, *quotes: Quote) -> None:
    for quote in quotes:
        await repository.save(quote)


@pytest.fixture
def random_source() -> FakeRandomSource:
    return FakeRandomSource()


@pytest.fixture
def fetcher() -> FakeQuoteFetcher:
    return FakeQuoteFetcher()


@pytest.fixture
def quote_repository(random_source: FakeRandomSource) -> InMemoryQuoteRepository:
    return InMemoryQuoteRepository(random_source)


@pytest.fixture
def engagement_repository() -> InMemoryEngagementRepository:
    return InMemoryEngagementRepository()


@pytest.fixture
def activity_log() -> ActivityLog:
    return ActivityLog()


@pytest.fixture
def broadcaster(activity_log: ActivityLog) -> ActivityBroadcaster:
    broadcaster = ActivityBroadcaster()
    activity_log.add_listener(broadcaster.handle_activity)
    return broadcaster


@pytest.fixture
def ranking(quote_repository: InMemoryQuoteRepository, activity_log: ActivityLog) -> RankingService:
    return RankingService(quote_repository, activity_log)


@pytest.fixture
def service(
    quote_repository: InMemoryQuoteRepository,
    engagement_repository: InMemoryEngagementRepository,
    fetcher: FakeQuoteFetcher,
    activity_log: ActivityLog,
    random_source: FakeRandomSource,
    broadcaster: ActivityBroadcaster,
) -> QuoteService:
    return QuoteService(
        quote_repository=quote_repository,
        engagement_repository=engagement_repository,
        quote_fetcher=fetcher,
        activity_log=activity_log,
        random_source=random_source,
        broadcaster=broadcaster,
    )
