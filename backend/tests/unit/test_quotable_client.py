"""Unit tests for the QuotableQuoteFetcher."""

import httpx
import pytest

from quotes_api.domain.exceptions import QuoteFetchError
from quotes_api.infrastructure.external import QuotableQuoteFetcher

QUOTABLE_URL = "https://api.quotable.io/random"
DUMMYJSON_URL = "https://dummyjson.com/quotes/random"


# ── Helpers ──


def _quotable_payload() -> dict:
    return {
        "_id": "abc123",
        "content": "Well begun is half done.",
        "author": "Aristotle",
        "tags": ["wisdom"],
        "length": 24,
        "dateAdded": "2020-01-01",
        "dateModified": "2023-04-14",
    }


def _dummyjson_payload() -> dict:
    return {"id": 7, "quote": "Simplicity is the ultimate sophistication.", "author": "Leonardo da Vinci"}


def _make_fetcher(routes: dict[str, httpx.Response | Exception]) -> tuple[QuotableQuoteFetcher, list[str]]:
    """Fetcher whose HTTP client answers each host from ``routes``; records requested hosts."""
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.host)
        outcome = routes[request.url.host]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return QuotableQuoteFetcher(QUOTABLE_URL, DUMMYJSON_URL, http_client=client), requested


# ── Tests ──


@pytest.mark.asyncio
async def test_quotable_response_is_mapped():
    fetcher, requested = _make_fetcher({"api.quotable.io": httpx.Response(200, json=_quotable_payload())})

    quote = await fetcher.fetch_random_quote()

    assert quote.id == "abc123"
    assert quote.author == "Aristotle"
    assert quote.tags == ["wisdom"]
    assert quote.date_added == "2020-01-01"
    assert requested == ["api.quotable.io"]


@pytest.mark.asyncio
async def test_falls_back_to_dummyjson_on_http_error():
    fetcher, requested = _make_fetcher({
        "api.quotable.io": httpx.Response(503),
        "dummyjson.com": httpx.Response(200, json=_dummyjson_payload()),
    })

    quote = await fetcher.fetch_random_quote()

    assert quote.id == "7"
    assert quote.content.startswith("Simplicity")
    assert quote.tags == []
    assert quote.length == len(quote.content)
    assert requested == ["api.quotable.io", "dummyjson.com"]


@pytest.mark.asyncio
async def test_falls_back_on_invalid_payload():
    fetcher, _ = _make_fetcher({
        "api.quotable.io": httpx.Response(200, json={"unexpected": True}),
        "dummyjson.com": httpx.Response(200, json=_dummyjson_payload()),
    })

    quote = await fetcher.fetch_random_quote()

    assert quote.author == "Leonardo da Vinci"


@pytest.mark.asyncio
async def test_raises_when_both_sources_fail():
    fetcher, _ = _make_fetcher({
        "api.quotable.io": httpx.ConnectError("refused"),
        "dummyjson.com": httpx.Response(500),
    })

    with pytest.raises(QuoteFetchError) as exc_info:
        await fetcher.fetch_random_quote()

    assert exc_info.value.source == "dummyjson.com"


def test_source_name():
    assert QuotableQuoteFetcher().source_name == "quotable"
