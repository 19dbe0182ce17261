from .in_memory_quote_repository import InMemoryQuoteRepository
from .in_memory_engagement_repository import InMemoryEngagementRepository
from .sample_quotes import SAMPLE_QUOTES, seed_sample_quotes

__all__ = [
    "InMemoryQuoteRepository",
    "InMemoryEngagementRepository",
    "SAMPLE_QUOTES",
    "seed_sample_quotes",
]
