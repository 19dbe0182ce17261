"""Domain entities for the activity log."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum


class ActivityType(str, Enum):
    """Kinds of events recorded in the activity log."""

    NEW_QUOTE_ADDED = "NEW_QUOTE_ADDED"
    QUOTE_LIKED = "QUOTE_LIKED"
    QUOTE_UNLIKED = "QUOTE_UNLIKED"
    QUOTE_SHARED = "QUOTE_SHARED"
    QUOTE_REPORTED = "QUOTE_REPORTED"


class TimeRange(str, Enum):
    """Fixed analytics windows. ``ALL`` is unbounded."""

    LAST_HOUR = "1h"
    LAST_DAY = "24h"
    LAST_WEEK = "7d"
    LAST_MONTH = "30d"
    ALL = "all"

    @property
    def window(self) -> timedelta | None:
        return _WINDOWS[self]

    def cutoff(self, now: datetime) -> datetime | None:
        """Earliest timestamp inside the window, or None when unbounded."""
        window = self.window
        return None if window is None else now - window


_WINDOWS: dict[TimeRange, timedelta | None] = {
    TimeRange.LAST_HOUR: timedelta(hours=1),
    TimeRange.LAST_DAY: timedelta(hours=24),
    TimeRange.LAST_WEEK: timedelta(days=7),
    TimeRange.LAST_MONTH: timedelta(days=30),
    TimeRange.ALL: None,
}


@dataclass(frozen=True)
class ActivityEvent:
    """One append-only entry in the activity log."""

    type: ActivityType
    quote_id: str
    user_id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    details: str | None = None
