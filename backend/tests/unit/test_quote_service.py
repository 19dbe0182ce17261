"""Unit tests for the QuoteService facade."""

import asyncio

import pytest

from quotes_api.application.services import QuoteService
from quotes_api.domain.entities import (
    ActivityType,
    FeedType,
    QuoteFilter,
    QuoteLike,
    QuoteSort,
    SortDirection,
    SortField,
)
from quotes_api.domain.exceptions import (
    CollectionNotFoundError,
    ExternalApiError,
    InsufficientQuotesError,
    QuoteNotFoundError,
)
from conftest import make_quote, store


# ── Random quote flow ──


@pytest.mark.asyncio
async def test_empty_store_fetches_and_stores_upstream_quote(
    service: QuoteService, fetcher, quote_repository, activity_log
):
    fetcher.quotes.append(make_quote("up-1", "Fresh from upstream"))

    quote = await service.get_random_quote()

    assert quote.id == "up-1"
    assert await quote_repository.get_by_id("up-1") is not None
    assert activity_log.events(event_type=ActivityType.NEW_QUOTE_ADDED)[0].quote_id == "up-1"


@pytest.mark.asyncio
async def test_refetched_known_quote_is_not_logged_again(
    service: QuoteService, fetcher, quote_repository, random_source, activity_log
):
    await store(quote_repository, make_quote("known", "Already here"))
    fetcher.quotes.append(make_quote("known", "Already here"))
    random_source.values = [0.1]

    quote = await service.get_random_quote()

    assert quote.id == "known"
    assert fetcher.calls == 1
    assert await quote_repository.count() == 1
    assert activity_log.events(event_type=ActivityType.NEW_QUOTE_ADDED) == []


@pytest.mark.asyncio
async def test_empty_store_and_failed_fetch_raises(service: QuoteService, fetcher):
    fetcher.fail = True
    with pytest.raises(ExternalApiError):
        await service.get_random_quote()


@pytest.mark.asyncio
async def test_failed_refresh_falls_back_to_stored_quote(
    service: QuoteService, fetcher, quote_repository, random_source
):
    await store(quote_repository, make_quote("local"))
    fetcher.fail = True
    random_source.values = [0.1]

    quote = await service.get_random_quote()

    assert quote.id == "local"
    assert fetcher.calls == 1


@pytest.mark.asyncio
async def test_no_refresh_above_probability(
    service: QuoteService, fetcher, quote_repository, random_source
):
    await store(quote_repository, make_quote("local"))
    random_source.values = [0.5]

    quote = await service.get_random_quote()

    assert quote.id == "local"
    assert fetcher.calls == 0


@pytest.mark.asyncio
async def test_identified_user_gets_prioritized_quote(
    service: QuoteService, quote_repository, random_source
):
    await store(quote_repository, make_quote("plain"), make_quote("popular"))
    await quote_repository.add_like(QuoteLike(quote_id="popular", user_id="fan"))
    random_source.values = [0.9, 0.1]

    quote = await service.get_random_quote(user_id="reader")

    assert quote.id == "popular"
    assert quote.likes == 1


@pytest.mark.asyncio
async def test_anonymous_user_is_never_prioritized(
    service: QuoteService, quote_repository, random_source
):
    await store(quote_repository, make_quote("plain"), make_quote("popular"))
    await quote_repository.add_like(QuoteLike(quote_id="popular", user_id="fan"))
    random_source.values = [0.9, 0.0]

    quote = await service.get_random_quote()

    assert quote.id == "plain"


# ── Likes ──


@pytest.mark.asyncio
async def test_like_is_idempotent(service: QuoteService, quote_repository, activity_log):
    await store(quote_repository, make_quote("q1"))

    await service.like_quote("q1", "alice")
    await service.like_quote("q1", "alice")

    quote = await service.get_quote("q1", "alice")
    assert quote.likes == 1
    assert quote.liked_by_current_user is True
    assert len(activity_log.events(event_type=ActivityType.QUOTE_LIKED)) == 1
    assert (await service.get_user_preferences("alice")).liked_quotes == ["q1"]


@pytest.mark.asyncio
async def test_concurrent_likes_store_one_like(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("q1"))

    await asyncio.gather(*(service.like_quote("q1", "alice") for _ in range(10)))

    assert len(await quote_repository.get_likes("q1")) == 1


@pytest.mark.asyncio
async def test_like_missing_quote_raises(service: QuoteService):
    with pytest.raises(QuoteNotFoundError):
        await service.like_quote("missing", "alice")


@pytest.mark.asyncio
async def test_unlike_without_like_is_silent(service: QuoteService, quote_repository, activity_log):
    await store(quote_repository, make_quote("q1"))

    await service.unlike_quote("q1", "alice")

    assert len(activity_log) == 0


@pytest.mark.asyncio
async def test_unlike_removes_like_and_logs(service: QuoteService, quote_repository, activity_log):
    await store(quote_repository, make_quote("q1"))
    await service.like_quote("q1", "alice")

    await service.unlike_quote("q1", "alice")

    assert (await service.get_quote("q1")).likes == 0
    assert activity_log.recent(1)[0].type == ActivityType.QUOTE_UNLIKED
    assert (await service.get_user_preferences("alice")).liked_quotes == []


# ── Search, similarity & filtering ──


@pytest.mark.asyncio
async def test_similar_quotes_exclude_target(service: QuoteService, quote_repository):
    await store(
        quote_repository,
        make_quote("t", "courage conquers fear", "Rumi"),
        make_quote("near", "courage conquers doubt", "Rumi"),
        make_quote("far", "bananas are yellow", "Kafka"),
    )

    similar = await service.get_similar_quotes("t", limit=5)

    assert [q.id for q in similar] == ["near", "far"]
    assert await service.get_similar_quotes("unknown") == []


@pytest.mark.asyncio
async def test_search_matches_content_author_and_tags(service: QuoteService, quote_repository):
    await store(
        quote_repository,
        make_quote("a", "Knowledge is power", "Bacon"),
        make_quote("b", "Short text", "Socrates", tags=["knowledge"]),
        make_quote("c", "Unrelated", "Kafka"),
    )
    await service.like_quote("b", "u")

    results = await service.search_quotes("KNOWLEDGE")

    assert [q.id for q in results] == ["b", "a"]
    assert len(await service.search_quotes(None, limit=2)) == 2


@pytest.mark.asyncio
async def test_empty_search_returns_all_ranked_by_likes(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("a"), make_quote("b"), make_quote("c"))
    await service.like_quote("c", "u")

    assert [q.id for q in await service.search_quotes(None)] == ["c", "a", "b"]
    assert [q.id for q in await service.search_quotes("")] == ["c", "a", "b"]


@pytest.mark.asyncio
async def test_search_keeps_whitespace_in_query(service: QuoteService, quote_repository):
    await store(
        quote_repository,
        make_quote("a", "Nospacehere", "Anon"),
        make_quote("b", "Two words", "Anon"),
    )

    assert [q.id for q in await service.search_quotes("here ")] == []
    assert [q.id for q in await service.search_quotes(" ")] == ["b"]


@pytest.mark.asyncio
async def test_filter_and_sort(service: QuoteService, quote_repository):
    await store(
        quote_repository,
        make_quote("short", "Be brief", "Rumi", tags=["life"]),
        make_quote("long", "A much longer quote about life and time", "Rumi", tags=["Life"]),
        make_quote("other", "Something else", "Kafka", tags=["art"]),
    )

    results = await service.get_quotes_with_filter(
        QuoteFilter(author="rumi", tags=["life"], min_length=5),
        QuoteSort(field=SortField.LENGTH, direction=SortDirection.DESC),
    )

    assert [q.id for q in results] == ["long", "short"]

    paged = await service.get_quotes_with_filter(
        sort=QuoteSort(field=SortField.AUTHOR), limit=1, offset=1
    )
    assert [q.id for q in paged] == ["short"]


@pytest.mark.asyncio
async def test_filter_by_min_likes(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("q1"), make_quote("q2"))
    await service.like_quote("q2", "u")

    results = await service.get_quotes_with_filter(QuoteFilter(min_likes=1))

    assert [q.id for q in results] == ["q2"]


# ── Comparison ──


@pytest.mark.asyncio
async def test_compare_requires_two_resolvable_quotes(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("q1"))
    with pytest.raises(InsufficientQuotesError):
        await service.compare_quotes(["q1", "missing"])


@pytest.mark.asyncio
async def test_compare_reports_similarities_differences_and_metrics(
    service: QuoteService, quote_repository
):
    await store(
        quote_repository,
        make_quote("a", "x" * 20, "Rumi", tags=["love"]),
        make_quote("b", "y" * 100, "Kafka", tags=["love", "art"]),
        make_quote("c", "z" * 30, "Rumi"),
    )
    await service.like_quote("a", "u")

    comparison = await service.compare_quotes(["a", "b", "c"])

    assert len(comparison.similarities) == 3
    assert comparison.similarities[0].quote_ids == ("a", "b")
    assert {d.field for d in comparison.differences} == {"author", "length"}
    assert "quite different" in comparison.recommendation
    assert comparison.metrics.average_length == pytest.approx(50.0)
    assert comparison.metrics.average_likes == pytest.approx(1 / 3)
    assert comparison.metrics.common_tags == ["love"]
    assert comparison.metrics.author_diversity == pytest.approx(2 / 3)


@pytest.mark.asyncio
async def test_compare_without_metrics(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("a"), make_quote("b"))
    comparison = await service.compare_quotes(["a", "b"], include_metrics=False)
    assert comparison.metrics is None
    assert comparison.differences == []


# ── Collections & preferences ──


@pytest.mark.asyncio
async def test_collection_lifecycle(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("q1"))
    collection = await service.create_collection("Favorites", "alice")

    await service.add_quote_to_collection(collection.id, "q1", "alice")
    updated = await service.add_quote_to_collection(collection.id, "q1", "alice")
    assert [q.id for q in updated.quotes] == ["q1"]

    emptied = await service.remove_quote_from_collection(collection.id, "q1", "alice")
    assert emptied.quotes == []

    await service.delete_collection(collection.id, "alice")
    assert await service.get_user_collections("alice") == []


@pytest.mark.asyncio
async def test_collections_are_private_to_owner(service: QuoteService):
    collection = await service.create_collection("Mine", "alice")

    with pytest.raises(CollectionNotFoundError):
        await service.get_collection(collection.id, "mallory")
    with pytest.raises(CollectionNotFoundError):
        await service.delete_collection(collection.id, "mallory")


@pytest.mark.asyncio
async def test_add_missing_quote_to_collection_raises(service: QuoteService):
    collection = await service.create_collection("Mine", "alice")
    with pytest.raises(QuoteNotFoundError):
        await service.add_quote_to_collection(collection.id, "missing", "alice")


@pytest.mark.asyncio
async def test_preferences_partial_update(service: QuoteService):
    await service.update_user_preferences("alice", favorite_authors=["Rumi"], favorite_tags=["love"])
    prefs = await service.update_user_preferences("alice", favorite_tags=["art"])

    assert prefs.favorite_authors == ["Rumi"]
    assert prefs.favorite_tags == ["art"]


# ── History, feeds, sharing & reports ──


@pytest.mark.asyncio
async def test_quote_history_is_newest_first_and_unique(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("q1"), make_quote("q2"))
    await service.like_quote("q1", "alice")
    await service.like_quote("q2", "alice")
    await service.share_quote("q1", "alice")

    history = await service.get_quote_history("alice")

    assert [q.id for q in history] == ["q1", "q2"]


@pytest.mark.asyncio
async def test_live_feed_relevance_and_activity(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("q1", author="Rumi"), make_quote("q2"))
    await service.update_user_preferences("alice", favorite_authors=["Rumi"])
    await service.like_quote("q2", "bob")

    feed = await service.get_live_feed("alice", feed_type=FeedType.POPULAR)

    assert feed.items[0].quote.id == "q2"
    assert feed.items[0].activity.type == ActivityType.QUOTE_LIKED
    relevance = {item.quote.id: item.relevance_score for item in feed.items}
    assert relevance == {"q2": pytest.approx(0.5), "q1": pytest.approx(0.8)}
    assert feed.next_update > feed.last_updated


@pytest.mark.asyncio
async def test_anonymous_personalized_feed_falls_back_to_recent(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("q1"), make_quote("q2"), make_quote("q3"))

    feed = await service.get_live_feed(None, limit=2, include_activity=False)

    assert [item.quote.id for item in feed.items] == ["q2", "q3"]
    assert all(item.activity is None for item in feed.items)


@pytest.mark.asyncio
async def test_share_link_round_trip(service: QuoteService, quote_repository):
    await store(quote_repository, make_quote("q1"))

    url = await service.share_quote("q1", "alice")

    assert url.startswith("https://quotes-service.com/share/")
    resolved = await service.resolve_share_link(url.rsplit("/", 1)[1])
    assert resolved.id == "q1"
    assert await service.resolve_share_link("nope") is None


@pytest.mark.asyncio
async def test_report_quote(service: QuoteService, quote_repository, engagement_repository, activity_log):
    await store(quote_repository, make_quote("q1"))

    assert await service.report_quote("q1", "spam", "alice") is True
    assert (await engagement_repository.get_reports("q1"))[0].reason == "spam"
    assert activity_log.recent(1)[0].type == ActivityType.QUOTE_REPORTED
    with pytest.raises(QuoteNotFoundError):
        await service.report_quote("missing", "spam", "alice")
