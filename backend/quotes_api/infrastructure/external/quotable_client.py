"""Upstream quote client — implements the QuoteFetcher interface.

Tries the Quotable API first and falls back to DummyJSON. Both payloads are
validated with pydantic before being mapped to the domain Quote.
"""

import logging

import httpx
from pydantic import BaseModel, Field, ValidationError

from quotes_api.application.interfaces import QuoteFetcher
from quotes_api.domain.entities import Quote
from quotes_api.domain.exceptions import QuoteFetchError

logger = logging.getLogger(__name__)


class QuotablePayload(BaseModel):
    id: str = Field(..., alias="_id")
    content: str
    author: str
    tags: list[str] = Field(default_factory=list)
    length: int | None = None
    date_added: str | None = Field(default=None, alias="dateAdded")
    date_modified: str | None = Field(default=None, alias="dateModified")

    def to_entity(self) -> Quote:
        return Quote(
            id=self.id,
            content=self.content,
            author=self.author,
            tags=self.tags,
            length=self.length,
            date_added=self.date_added,
            date_modified=self.date_modified,
        )


class DummyJsonPayload(BaseModel):
    id: int
    quote: str
    author: str

    def to_entity(self) -> Quote:
        return Quote(
            id=str(self.id),
            content=self.quote,
            author=self.author,
            tags=[],
            length=len(self.quote),
        )


class QuotableQuoteFetcher(QuoteFetcher):
    """Infrastructure adapter — fetches random quotes over HTTP with httpx."""

    def __init__(
        self,
        quotable_url: str = "https://api.quotable.io/random",
        fallback_url: str = "https://dummyjson.com/quotes/random",
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._quotable_url = quotable_url
        self._fallback_url = fallback_url
        self._timeout = timeout
        self._http_client = http_client

    @property
    def source_name(self) -> str:
        return "quotable"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def fetch_random_quote(self) -> Quote:
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            try:
                return await self._fetch(client, self._quotable_url, QuotablePayload)
            except QuoteFetchError as e:
                logger.warning("Quotable API failed, trying DummyJSON fallback: %s", e)
            return await self._fetch(client, self._fallback_url, DummyJsonPayload)
        finally:
            if should_close:
                await client.aclose()

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        url: str,
        payload_type: type[QuotablePayload] | type[DummyJsonPayload],
    ) -> Quote:
        source = httpx.URL(url).host
        try:
            response = await client.get(url, timeout=self._timeout)
        except httpx.HTTPError as e:
            raise QuoteFetchError(source, f"request failed: {e}") from e

        if response.status_code != 200:
            raise QuoteFetchError(source, f"HTTP {response.status_code}")

        try:
            payload = payload_type.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise QuoteFetchError(source, f"invalid payload: {e}") from e

        quote = payload.to_entity()
        logger.debug("Fetched quote '%s' from %s", quote.id, source)
        return quote
