"""Abstract repository interface (port) for quotes and their likes."""

from abc import ABC, abstractmethod

from quotes_api.domain.entities import Quote, QuoteLike


class QuoteRepository(ABC):
    """Port for quote and like storage — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_random_quote(self) -> Quote | None:
        """Return a uniformly random stored quote, or None when the store is empty."""
        ...

    @abstractmethod
    async def get_by_id(self, quote_id: str) -> Quote | None:
        ...

    @abstractmethod
    async def get_by_ids(self, quote_ids: list[str]) -> list[Quote]:
        """Resolve ids in the given order, skipping unknown ones."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Quote]:
        """All stored quotes in insertion order."""
        ...

    @abstractmethod
    async def save(self, quote: Quote) -> None:
        """Insert a quote, replacing any quote with the same id."""
        ...

    @abstractmethod
    async def get_likes(self, quote_id: str) -> list[QuoteLike]:
        ...

    @abstractmethod
    async def get_user_like(self, quote_id: str, user_id: str) -> QuoteLike | None:
        ...

    @abstractmethod
    async def get_liked_quote_ids(self, user_id: str) -> list[str]:
        """Ids of every quote the user currently likes, in store order."""
        ...

    @abstractmethod
    async def add_like(self, like: QuoteLike) -> bool:
        """Insert the like unless the pair already exists.

        The check and the insert must be atomic. Returns True when a new
        like was stored, False when it was already present.
        """
        ...

    @abstractmethod
    async def remove_like(self, quote_id: str, user_id: str) -> bool:
        """Delete the pair's like. Returns True if one existed."""
        ...

    @abstractmethod
    async def count(self) -> int:
        ...
