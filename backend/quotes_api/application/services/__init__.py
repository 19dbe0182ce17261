from .activity_broadcaster import ActivityBroadcaster
from .activity_log import ActivityLog
from .ranking_service import RankingService
from .recommendation_service import RecommendationService
from .quote_service import QuoteService

__all__ = [
    "ActivityBroadcaster",
    "ActivityLog",
    "RankingService",
    "RecommendationService",
    "QuoteService",
]
