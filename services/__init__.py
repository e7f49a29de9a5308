from .analytics_service import AnalyticsService
from .behavior_service import BehaviorService
from .feedback_service import FeedbackService
from .preference_service import PreferenceService
from .recommendation_service import RecommendationService

__all__ = [
    "AnalyticsService",
    "BehaviorService",
    "FeedbackService",
    "PreferenceService",
    "RecommendationService",
]
