"""In-process repository for quotes and likes."""

from quotes_api.application.interfaces import QuoteRepository, RandomSource
from quotes_api.domain.entities import Quote, QuoteLike
from quotes_api.infrastructure.random_source import StdlibRandomSource


class InMemoryQuoteRepository(QuoteRepository):
    """Implements the QuoteRepository port with plain dicts.

    Methods never await between reading and writing shared state, so each
    call is atomic under the asyncio event loop.
    """

    def __init__(self, random_source: RandomSource | None = None):
        self._quotes: dict[str, Quote] = {}
        self._likes: dict[str, dict[str, QuoteLike]] = {}
        self._random = random_source or StdlibRandomSource()

    async def get_random_quote(self) -> Quote | None:
        if not self._quotes:
            return None
        return self._random.choice(list(self._quotes.values()))

    async def get_by_id(self, quote_id: str) -> Quote | None:
        return self._quotes.get(quote_id)

    async def get_by_ids(self, quote_ids: list[str]) -> list[Quote]:
        return [self._quotes[qid] for qid in quote_ids if qid in self._quotes]

    async def get_all(self) -> list[Quote]:
        return list(self._quotes.values())

    async def save(self, quote: Quote) -> None:
        self._quotes[quote.id] = quote

    async def get_likes(self, quote_id: str) -> list[QuoteLike]:
        return list(self._likes.get(quote_id, {}).values())

    async def get_user_like(self, quote_id: str, user_id: str) -> QuoteLike | None:
        return self._likes.get(quote_id, {}).get(user_id)

    async def get_liked_quote_ids(self, user_id: str) -> list[str]:
        return [qid for qid in self._quotes if user_id in self._likes.get(qid, {})]

    async def add_like(self, like: QuoteLike) -> bool:
        quote_likes = self._likes.setdefault(like.quote_id, {})
        if like.user_id in quote_likes:
            return False
        quote_likes[like.user_id] = like
        return True

    async def remove_like(self, quote_id: str, user_id: str) -> bool:
        quote_likes = self._likes.get(quote_id)
        if not quote_likes or user_id not in quote_likes:
            return False
        del quote_likes[user_id]
        return True

    async def count(self) -> int:
        return len(self._quotes)
