"""Built-in quotes loaded at startup so a fresh instance can serve without upstream."""

import logging

from quotes_api.application.interfaces import QuoteRepository
from quotes_api.domain.entities import Quote

logger = logging.getLogger(__name__)

SAMPLE_QUOTES: tuple[Quote, ...] = (
    Quote(
        id="sample-1",
        content="The only way to do great work is to love what you do.",
        author="Steve Jobs",
        tags=["inspirational", "work"],
    ),
    Quote(
        id="sample-2",
        content="Life is what happens when you're busy making other plans.",
        author="John Lennon",
        tags=["life"],
    ),
    Quote(
        id="sample-3",
        content="In the middle of difficulty lies opportunity.",
        author="Albert Einstein",
        tags=["inspirational", "wisdom"],
    ),
    Quote(
        id="sample-4",
        content="Imagination is more important than knowledge.",
        author="Albert Einstein",
        tags=["wisdom", "knowledge"],
    ),
    Quote(
        id="sample-5",
        content="The unexamined life is not worth living.",
        author="Socrates",
        tags=["philosophy", "life"],
    ),
    Quote(
        id="sample-6",
        content="Success is not final, failure is not fatal: it is the courage to continue that counts.",
        author="Winston Churchill",
        tags=["success", "inspirational"],
    ),
)


async def seed_sample_quotes(repository: QuoteRepository) -> int:
    """Store every sample quote not already present. Idempotent."""
    added = 0
    for quote in SAMPLE_QUOTES:
        if await repository.get_by_id(quote.id) is None:
            await repository.save(quote)
            added += 1
    if added:
        logger.info("Seeded %d sample quote(s)", added)
    else:
        logger.debug("Sample quotes already present")
    return added
