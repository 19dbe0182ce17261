from .quote_repository import QuoteRepository
from .engagement_repository import EngagementRepository
from .quote_fetcher import QuoteFetcher
from .random_source import RandomSource

__all__ = [
    "QuoteRepository",
    "EngagementRepository",
    "QuoteFetcher",
    "RandomSource",
]
