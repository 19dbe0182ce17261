"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class QuoteNotFoundError(EntityNotFoundError):
    """Raised when a quote id does not resolve to a stored quote."""

    def __init__(self, quote_id: str):
        super().__init__("Quote", quote_id)


class CollectionNotFoundError(EntityNotFoundError):
    """Raised when a collection is missing or not owned by the requesting user.

    Both cases produce the same error so callers cannot probe for
    collections that belong to someone else.
    """

    def __init__(self, collection_id: str):
        super().__init__("Collection", collection_id)


class QuoteFetchError(Exception):
    """Raised when every upstream quote source failed."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"[{source}] {message}")


class ExternalApiError(Exception):
    """Raised when the upstream fetch failed and no local quote is available."""

    def __init__(self, message: str = "Failed to fetch quote from external service and no local quotes available"):
        super().__init__(message)


class InsufficientQuotesError(Exception):
    """Raised when a comparison resolves fewer than two quotes."""

    def __init__(self, found: int, required: int = 2):
        self.found = found
        self.required = required
        super().__init__(f"At least {required} valid quotes required for comparison, got {found}")
