"""Pydantic DTOs for activity log events."""

from datetime import datetime

from pydantic import BaseModel

from quotes_api.domain.entities import ActivityType


class ActivityEventResponse(BaseModel):
    type: ActivityType
    quote_id: str
    user_id: str | None = None
    timestamp: datetime
    details: str | None = None

    model_config = {"from_attributes": True}
