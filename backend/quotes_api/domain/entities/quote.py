"""Domain entities for quotes, likes and the stats derived from them."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


@dataclass(frozen=True)
class Quote:
    """Core domain entity — a quote is never mutated once created."""

    id: str
    content: str
    author: str
    tags: list[str] = field(default_factory=list)
    length: int | None = None
    date_added: str | None = None
    date_modified: str | None = None

    @property
    def effective_length(self) -> int:
        """Declared length, falling back to the character count of the content."""
        return self.length or len(self.content)


@dataclass
class QuoteLike:
    """A single user's like on a quote. At most one per (quote_id, user_id)."""

    quote_id: str
    user_id: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class QuoteWithStats:
    """Read model: a quote plus stats computed at read time, never cached."""

    id: str
    content: str
    author: str
    tags: list[str]
    length: int | None
    date_added: str | None
    date_modified: str | None
    likes: int = 0
    liked_by_current_user: bool = False
    popularity_score: float = 0.0
    trending_score: float = 0.0

    @classmethod
    def from_quote(
        cls,
        quote: Quote,
        *,
        likes: int,
        liked_by_current_user: bool,
        popularity_score: float,
        trending_score: float,
    ) -> "QuoteWithStats":
        return cls(
            id=quote.id,
            content=quote.content,
            author=quote.author,
            tags=list(quote.tags),
            length=quote.length,
            date_added=quote.date_added,
            date_modified=quote.date_modified,
            likes=likes,
            liked_by_current_user=liked_by_current_user,
            popularity_score=popularity_score,
            trending_score=trending_score,
        )


class SortField(str, Enum):
    """Fields a quote listing can be ordered by."""

    LIKES = "likes"
    AUTHOR = "author"
    LENGTH = "length"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class QuoteSort:
    field: SortField
    direction: SortDirection = SortDirection.ASC


@dataclass
class QuoteFilter:
    """Optional criteria for narrowing a quote listing. Unset fields match everything."""

    author: str | None = None
    tags: list[str] = field(default_factory=list)
    min_length: int | None = None
    max_length: int | None = None
    min_likes: int | None = None
