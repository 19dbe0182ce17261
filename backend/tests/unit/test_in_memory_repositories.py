"""Unit tests for the in-memory repositories and sample data seeding."""

import pytest

from quotes_api.domain.entities import QuoteCollection, QuoteLike, UserPreferences
from quotes_api.infrastructure.persistence import (
    SAMPLE_QUOTES,
    InMemoryEngagementRepository,
    InMemoryQuoteRepository,
    seed_sample_quotes,
)
from conftest import make_quote, store


@pytest.mark.asyncio
async def test_random_quote_on_empty_store_is_none(quote_repository: InMemoryQuoteRepository):
    assert await quote_repository.get_random_quote() is None


@pytest.mark.asyncio
async def test_get_by_ids_keeps_order_and_skips_unknown(quote_repository: InMemoryQuoteRepository):
    await store(quote_repository, make_quote("a"), make_quote("b"))

    quotes = await quote_repository.get_by_ids(["b", "missing", "a"])

    assert [q.id for q in quotes] == ["b", "a"]


@pytest.mark.asyncio
async def test_save_replaces_same_id(quote_repository: InMemoryQuoteRepository):
    await store(quote_repository, make_quote("a", "first"), make_quote("a", "second"))

    assert await quote_repository.count() == 1
    assert (await quote_repository.get_by_id("a")).content == "second"


@pytest.mark.asyncio
async def test_add_like_once_per_user(quote_repository: InMemoryQuoteRepository):
    assert await quote_repository.add_like(QuoteLike(quote_id="a", user_id="u")) is True
    assert await quote_repository.add_like(QuoteLike(quote_id="a", user_id="u")) is False
    assert await quote_repository.add_like(QuoteLike(quote_id="a", user_id="v")) is True

    assert [like.user_id for like in await quote_repository.get_likes("a")] == ["u", "v"]
    assert await quote_repository.remove_like("a", "u") is True
    assert await quote_repository.remove_like("a", "u") is False
    assert await quote_repository.get_user_like("a", "u") is None


@pytest.mark.asyncio
async def test_liked_quote_ids(quote_repository: InMemoryQuoteRepository):
    await store(quote_repository, make_quote("a"), make_quote("b"))
    await quote_repository.add_like(QuoteLike(quote_id="b", user_id="u"))

    assert await quote_repository.get_liked_quote_ids("u") == ["b"]


@pytest.mark.asyncio
async def test_engagement_repository_round_trips():
    repository = InMemoryEngagementRepository()
    await repository.save_preferences(UserPreferences(user_id="u"))
    collection = await repository.save_collection(QuoteCollection(name="c", user_id="u"))
    await repository.save_collection(QuoteCollection(name="other", user_id="v"))

    assert await repository.count_users() == 1
    assert [c.id for c in await repository.list_collections("u")] == [collection.id]
    assert await repository.delete_collection(collection.id) is True
    assert await repository.delete_collection(collection.id) is False


@pytest.mark.asyncio
async def test_seed_sample_quotes_is_idempotent(quote_repository: InMemoryQuoteRepository):
    assert await seed_sample_quotes(quote_repository) == len(SAMPLE_QUOTES)
    assert await seed_sample_quotes(quote_repository) == 0
    assert await quote_repository.count() == len(SAMPLE_QUOTES)
