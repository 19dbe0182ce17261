"""Domain entities owned by users: quote collections and moderation reports."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from .quote import Quote


@dataclass
class QuoteCollection:
    """An ordered, duplicate-free set of quotes owned by one user."""

    name: str
    user_id: str
    description: str | None = None
    is_public: bool = False
    likes: int = 0
    quotes: list[Quote] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    def contains(self, quote_id: str) -> bool:
        return any(q.id == quote_id for q in self.quotes)

    def add_quote(self, quote: Quote) -> bool:
        """Append the quote unless already present. Returns True if added."""
        if self.contains(quote.id):
            return False
        self.quotes.append(quote)
        self.updated_at = datetime.now(timezone.utc)
        return True

    def remove_quote(self, quote_id: str) -> None:
        self.quotes = [q for q in self.quotes if q.id != quote_id]
        self.updated_at = datetime.now(timezone.utc)


@dataclass(frozen=True)
class QuoteReport:
    """A user's report flagging a quote."""

    quote_id: str
    reason: str
    user_id: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
