"""Activity endpoints — recent events and the live SSE stream."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from quotes_api.application.schemas import ActivityEventResponse
from quotes_api.application.services import ActivityBroadcaster, QuoteService
from quotes_api.infrastructure.dependencies import get_broadcaster, get_quote_service

router = APIRouter(prefix="/activity", tags=["Activity"])


@router.get("/recent", response_model=list[ActivityEventResponse])
async def get_recent_activity(
    limit: int = Query(20, ge=1, le=100),
    service: QuoteService = Depends(get_quote_service),
) -> list[ActivityEventResponse]:
    events = service.recent_activity(limit)
    return [ActivityEventResponse.model_validate(e, from_attributes=True) for e in events]


@router.get("/stream")
async def activity_stream(
    topic: str = Query(
        ...,
        min_length=1,
        description="quote_liked:{quote_id}, new_quote_added, trending_updated or user_activity:{user_id}",
    ),
    broadcaster: ActivityBroadcaster = Depends(get_broadcaster),
) -> StreamingResponse:
    """SSE endpoint for live activity on one topic.

    Clients connect via EventSource and receive one event per matching
    activity until they disconnect.
    """
    return StreamingResponse(
        broadcaster.subscribe(topic),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
