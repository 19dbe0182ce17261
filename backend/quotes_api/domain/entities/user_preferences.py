"""Domain entity — per-user taste profile used by recommendations."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class UserPreferences:
    """Favorite authors/tags and liked quote ids for a single user.

    Created lazily with empty defaults the first time a user is seen.
    """

    user_id: str
    favorite_authors: list[str] = field(default_factory=list)
    favorite_tags: list[str] = field(default_factory=list)
    liked_quotes: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(
        self,
        favorite_authors: list[str] | None = None,
        favorite_tags: list[str] | None = None,
    ) -> None:
        """Replace a list only when a new one is supplied."""
        if favorite_authors is not None:
            self.favorite_authors = list(favorite_authors)
        if favorite_tags is not None:
            self.favorite_tags = list(favorite_tags)

    def remember_like(self, quote_id: str) -> None:
        if quote_id not in self.liked_quotes:
            self.liked_quotes.append(quote_id)

    def forget_like(self, quote_id: str) -> None:
        if quote_id in self.liked_quotes:
            self.liked_quotes.remove(quote_id)
