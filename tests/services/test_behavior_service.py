"""
行为追踪服务测试
"""

import pytest

from models import BehaviorAction
from repositories import BehaviorRepository, ProductViewRepository
from schemas import TrackBehaviorRequest, TrackProductViewRequest
from services import BehaviorService


@pytest.mark.asyncio
async def test_track_behavior_appends_event(store):
    request = TrackBehaviorRequest(
        tenant_id="store-a",
        session_id="sess-1",
        action="search",
        search_query="lipstick",
        metadata={"page": 2},
    )

    result = await BehaviorService.track_behavior(store, request)

    assert result.success is True
    assert result.degraded is False

    async with store.session() as session:
        events = await BehaviorRepository.list_events(session, session_id="sess-1")
    assert len(events) == 1
    assert events[0].action == BehaviorAction.SEARCH
    assert events[0].search_query == "lipstick"
    assert events[0].metadata == {"page": 2}
    assert events[0].device_type == "desktop"
    assert events[0].source == "direct"


@pytest.mark.asyncio
async def test_track_product_view_writes_view_and_behavior(store):
    """浏览时长 45 秒同时写入浏览记录与 view 行为事件"""
    request = TrackProductViewRequest(
        tenant_id="store-a",
        session_id="sess-1",
        product_id=42,
        view_duration=45,
        customer_id=9,
    )

    result = await BehaviorService.track_product_view(store, request)

    assert result.success is True
    async with store.session() as session:
        views = await ProductViewRepository.list_views("sess-1", session)
        events = await BehaviorRepository.list_events(session, session_id="sess-1")

    assert [(v.product_id, v.view_duration, v.customer_id) for v in views] == [(42, 45, 9)]
    assert len(events) == 1
    assert events[0].action == BehaviorAction.VIEW
    assert events[0].product_id == 42
    assert events[0].time_spent == 45


@pytest.mark.asyncio
async def test_view_duration_defaults_to_zero(store):
    request = TrackProductViewRequest.model_validate(
        {"tenantId": "store-a", "sessionId": "sess-1", "productId": 5}
    )

    await BehaviorService.track_product_view(store, request)

    async with store.session() as session:
        views = await ProductViewRepository.list_views("sess-1", session)
    assert views[0].view_duration == 0


@pytest.mark.asyncio
async def test_track_behavior_degrades_on_storage_failure(broken_store):
    request = TrackBehaviorRequest(tenant_id="store-a", session_id="sess-1", action="view")

    result = await BehaviorService.track_behavior(broken_store, request)

    assert result.success is True
    assert result.degraded is True
    assert "数据库不可用" in result.error


@pytest.mark.asyncio
async def test_track_product_view_degrades_on_storage_failure(broken_store):
    request = TrackProductViewRequest(tenant_id="store-a", session_id="sess-1", product_id=1)

    result = await BehaviorService.track_product_view(broken_store, request)

    assert result.success is True
    assert result.degraded is True
