"""Abstract repository interface (port) for user-owned engagement state.

Covers everything the service layer owns besides quotes and likes:
preferences, collections, share links and moderation reports.
"""

from abc import ABC, abstractmethod

from quotes_api.domain.entities import QuoteCollection, QuoteReport, UserPreferences


class EngagementRepository(ABC):
    """Port for preference, collection, share and report storage."""

    # ── Preferences ──

    @abstractmethod
    async def get_preferences(self, user_id: str) -> UserPreferences | None:
        ...

    @abstractmethod
    async def save_preferences(self, preferences: UserPreferences) -> UserPreferences:
        ...

    @abstractmethod
    async def count_users(self) -> int:
        """Number of users with a preferences record."""
        ...

    # ── Collections ──

    @abstractmethod
    async def get_collection(self, collection_id: str) -> QuoteCollection | None:
        ...

    @abstractmethod
    async def list_collections(self, user_id: str) -> list[QuoteCollection]:
        ...

    @abstractmethod
    async def save_collection(self, collection: QuoteCollection) -> QuoteCollection:
        ...

    @abstractmethod
    async def delete_collection(self, collection_id: str) -> bool:
        ...

    # ── Share links & reports ──

    @abstractmethod
    async def save_share_link(self, share_id: str, quote_id: str) -> None:
        ...

    @abstractmethod
    async def get_shared_quote_id(self, share_id: str) -> str | None:
        ...

    @abstractmethod
    async def add_report(self, report: QuoteReport) -> None:
        ...

    @abstractmethod
    async def get_reports(self, quote_id: str) -> list[QuoteReport]:
        ...
