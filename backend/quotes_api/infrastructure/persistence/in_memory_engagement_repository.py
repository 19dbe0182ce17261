"""In-process repository for preferences, collections, share links and reports."""

from quotes_api.application.interfaces import EngagementRepository
from quotes_api.domain.entities import QuoteCollection, QuoteReport, UserPreferences


class InMemoryEngagementRepository(EngagementRepository):

    def __init__(self) -> None:
        self._preferences: dict[str, UserPreferences] = {}
        self._collections: dict[str, QuoteCollection] = {}
        self._share_links: dict[str, str] = {}
        self._reports: list[QuoteReport] = []

    async def get_preferences(self, user_id: str) -> UserPreferences | None:
        return self._preferences.get(user_id)

    async def save_preferences(self, preferences: UserPreferences) -> UserPreferences:
        self._preferences[preferences.user_id] = preferences
        return preferences

    async def count_users(self) -> int:
        return len(self._preferences)

    async def get_collection(self, collection_id: str) -> QuoteCollection | None:
        return self._collections.get(collection_id)

    async def list_collections(self, user_id: str) -> list[QuoteCollection]:
        return [c for c in self._collections.values() if c.is_owned_by(user_id)]

    async def save_collection(self, collection: QuoteCollection) -> QuoteCollection:
        self._collections[collection.id] = collection
        return collection

    async def delete_collection(self, collection_id: str) -> bool:
        return self._collections.pop(collection_id, None) is not None

    async def save_share_link(self, share_id: str, quote_id: str) -> None:
        self._share_links[share_id] = quote_id

    async def get_shared_quote_id(self, share_id: str) -> str | None:
        return self._share_links.get(share_id)

    async def add_report(self, report: QuoteReport) -> None:
        self._reports.append(report)

    async def get_reports(self, quote_id: str) -> list[QuoteReport]:
        return [r for r in self._reports if r.quote_id == quote_id]
