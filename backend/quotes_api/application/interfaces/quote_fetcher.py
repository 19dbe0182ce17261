"""Abstract quote fetcher interface — port for upstream quote APIs."""

from abc import ABC, abstractmethod

from quotes_api.domain.entities import Quote


class QuoteFetcher(ABC):
    """Port — defines what the application layer needs from an upstream quote source."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Unique name identifying this fetcher (e.g. 'quotable')."""
        ...

    @abstractmethod
    async def fetch_random_quote(self) -> Quote:
        """Fetch one random quote from upstream.

        Implementations may try several sources in order before giving up.

        Raises:
            QuoteFetchError: If every source failed.
        """
        ...
