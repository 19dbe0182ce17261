"""Quote endpoints — retrieval, search, likes, comparison, sharing and reports."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from quotes_api.application.schemas import (
    CompareRequest,
    QuoteComparisonResponse,
    QuoteListRequest,
    QuoteWithStatsResponse,
    ReportRequest,
    ShareResponse,
    SuccessResponse,
    UserActionRequest,
)
from quotes_api.application.services import QuoteService
from quotes_api.domain.entities import QuoteFilter, QuoteSort, TimeRange
from quotes_api.domain.exceptions import (
    EntityNotFoundError,
    ExternalApiError,
    InsufficientQuotesError,
)
from quotes_api.infrastructure.dependencies import get_quote_service

router = APIRouter(prefix="/quotes", tags=["Quotes"])


def _to_response(quote) -> QuoteWithStatsResponse:
    return QuoteWithStatsResponse.model_validate(quote, from_attributes=True)


@router.get("/random", response_model=QuoteWithStatsResponse)
async def get_random_quote(
    user_id: str | None = Query(None, description="Enables prioritization of popular quotes"),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteWithStatsResponse:
    """Return a random quote, occasionally refreshed from upstream."""
    try:
        quote = await service.get_random_quote(user_id)
    except ExternalApiError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch random quote",
        )
    return _to_response(quote)


@router.get("", response_model=list[QuoteWithStatsResponse])
async def search_quotes(
    q: str | None = Query(None, description="Substring matched against content, author and tags"),
    limit: int = Query(10, ge=1, le=100),
    user_id: str | None = Query(None),
    service: QuoteService = Depends(get_quote_service),
) -> list[QuoteWithStatsResponse]:
    """Search stored quotes, most liked first."""
    quotes = await service.search_quotes(q, limit, user_id)
    return [_to_response(quote) for quote in quotes]


@router.post("/filter", response_model=list[QuoteWithStatsResponse])
async def filter_quotes(
    request: QuoteListRequest,
    service: QuoteService = Depends(get_quote_service),
) -> list[QuoteWithStatsResponse]:
    """Filtered, sorted and paginated quote listing."""
    quote_filter = QuoteFilter(**request.filter.model_dump()) if request.filter else None
    sort = QuoteSort(**request.sort.model_dump()) if request.sort else None
    quotes = await service.get_quotes_with_filter(
        quote_filter, sort, request.limit, request.offset, request.user_id
    )
    return [_to_response(quote) for quote in quotes]


@router.get("/trending", response_model=list[QuoteWithStatsResponse])
async def get_trending_quotes(
    limit: int = Query(10, ge=1, le=100),
    time_range: TimeRange = Query(TimeRange.LAST_DAY),
    service: QuoteService = Depends(get_quote_service),
) -> list[QuoteWithStatsResponse]:
    """Quotes with the most likes inside the time window."""
    quotes = await service.get_trending_quotes(limit, time_range)
    return [_to_response(quote) for quote in quotes]


@router.post("/compare", response_model=QuoteComparisonResponse)
async def compare_quotes(
    request: CompareRequest,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteComparisonResponse:
    """Pairwise similarity, differences and metrics for 2-5 quotes."""
    try:
        comparison = await service.compare_quotes(request.quote_ids, request.include_metrics)
    except InsufficientQuotesError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return QuoteComparisonResponse.model_validate(comparison, from_attributes=True)


@router.get("/shared/{share_id}", response_model=QuoteWithStatsResponse)
async def resolve_share_link(
    share_id: str,
    user_id: str | None = Query(None),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteWithStatsResponse:
    quote = await service.resolve_share_link(share_id, user_id)
    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Share link not found")
    return _to_response(quote)


@router.get("/{quote_id}", response_model=QuoteWithStatsResponse)
async def get_quote(
    quote_id: str,
    user_id: str | None = Query(None),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteWithStatsResponse:
    """Retrieve a single quote by ID."""
    quote = await service.get_quote(quote_id, user_id)
    if quote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quote not found")
    return _to_response(quote)


@router.get("/{quote_id}/similar", response_model=list[QuoteWithStatsResponse])
async def get_similar_quotes(
    quote_id: str,
    limit: int = Query(5, ge=1, le=50),
    user_id: str | None = Query(None),
    service: QuoteService = Depends(get_quote_service),
) -> list[QuoteWithStatsResponse]:
    quotes = await service.get_similar_quotes(quote_id, limit, user_id)
    return [_to_response(quote) for quote in quotes]


@router.post("/{quote_id}/like", response_model=SuccessResponse)
async def like_quote(
    quote_id: str,
    request: UserActionRequest,
    service: QuoteService = Depends(get_quote_service),
) -> SuccessResponse:
    """Like a quote. Liking twice has no further effect."""
    try:
        await service.like_quote(quote_id, request.user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return SuccessResponse()


@router.delete("/{quote_id}/like", response_model=SuccessResponse)
async def unlike_quote(
    quote_id: str,
    request: UserActionRequest,
    service: QuoteService = Depends(get_quote_service),
) -> SuccessResponse:
    """Remove a like. Unliking a quote that is not liked has no effect."""
    await service.unlike_quote(quote_id, request.user_id)
    return SuccessResponse()


@router.post("/{quote_id}/share", response_model=ShareResponse)
async def share_quote(
    quote_id: str,
    request: UserActionRequest,
    service: QuoteService = Depends(get_quote_service),
) -> ShareResponse:
    try:
        share_url = await service.share_quote(quote_id, request.user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ShareResponse(share_url=share_url)


@router.post("/{quote_id}/report", response_model=SuccessResponse)
async def report_quote(
    quote_id: str,
    request: ReportRequest,
    service: QuoteService = Depends(get_quote_service),
) -> SuccessResponse:
    try:
        success = await service.report_quote(quote_id, request.reason, request.user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return SuccessResponse(success=success)
