"""
请求模型校验测试
"""

import pytest
from pydantic import ValidationError

from models import BehaviorAction, RecommendationType
from schemas import BestEffortResult, RecommendationRequest, TrackBehaviorRequest


def test_recommendation_request_defaults():
    request = RecommendationRequest(tenant_id="store-a", session_id="sess-1")

    assert request.limit == 10
    assert request.exclude_product_ids == []
    assert request.type == RecommendationType.HYBRID
    assert request.persist is False


def test_null_type_falls_back_to_hybrid():
    request = RecommendationRequest.model_validate({"tenantId": "store-a", "sessionId": "s", "type": None})

    assert request.type == RecommendationType.HYBRID


@pytest.mark.parametrize("payload", [
    {"tenantId": "store-a"},
    {"tenantId": "store-a", "sessionId": ""},
    {"sessionId": "s"},
    {"tenantId": "store-a", "sessionId": "s", "limit": -1},
    {"tenantId": "store-a", "sessionId": "s", "limit": 101},
    {"tenantId": "store-a", "sessionId": "s", "type": "random"},
])
def test_invalid_recommendation_requests(payload):
    with pytest.raises(ValidationError):
        RecommendationRequest.model_validate(payload)


def test_track_behavior_requires_action():
    with pytest.raises(ValidationError):
        TrackBehaviorRequest.model_validate({"tenantId": "store-a", "sessionId": "s"})

    request = TrackBehaviorRequest.model_validate(
        {"tenantId": "store-a", "sessionId": "s", "action": "add_to_cart", "timeSpent": 12}
    )
    assert request.action == BehaviorAction.ADD_TO_CART
    assert request.time_spent == 12


def test_best_effort_result_is_always_success():
    assert BestEffortResult.ok().model_dump() == {"success": True, "degraded": False, "error": None}

    degraded = BestEffortResult.degrade(RuntimeError("disk full"))
    assert degraded.success is True
    assert degraded.degraded is True
    assert degraded.error == "disk full"
