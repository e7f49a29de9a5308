from .recommendation_schema import (
    RecommendationRequest,
    TrackBehaviorRequest,
    TrackProductViewRequest,
    RecommendationFeedbackRequest
)
from .responses import (
    AnalyticsResponse,
    AnalyticsRow,
    BaseResponse,
    BestEffortResult,
    PreferenceListResponse,
    RecommendationListResponse,
    TrackingResponse
)

__all__ = [
    "AnalyticsResponse",
    "AnalyticsRow",
    "BaseResponse",
    "BestEffortResult",
    "PreferenceListResponse",
    "RecommendationFeedbackRequest",
    "RecommendationListResponse",
    "RecommendationRequest",
    "TrackBehaviorRequest",
    "TrackingResponse",
    "TrackProductViewRequest"
]
