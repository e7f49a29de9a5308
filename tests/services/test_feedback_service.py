"""
推荐反馈服务测试
"""

import pytest

from models import RecommendationResult, RecommendationType
from repositories import RecommendationRepository
from schemas import RecommendationFeedbackRequest, RecommendationRequest
from services import FeedbackService


def feedback(**overrides) -> RecommendationFeedbackRequest:
    payload = {"tenant_id": "store-a", "session_id": "sess-1", "product_id": 10, "action": "clicked"}
    payload.update(overrides)
    return RecommendationFeedbackRequest(**payload)


async def records_for(store, session_id="sess-1", product_id=None):
    async with store.session() as session:
        return await RecommendationRepository.list_for_visitor(session_id, session, product_id)


@pytest.mark.asyncio
async def test_clicked_feedback_sets_flag_and_timestamp(store, seeder):
    await seeder.recommendation(10, shown=True)

    result = await FeedbackService.track_feedback(store, feedback())

    assert result.success is True
    records = await records_for(store)
    assert records[0].clicked is True
    assert records[0].clicked_at is not None
    assert records[0].purchased is False
    assert records[0].purchased_at is None


@pytest.mark.asyncio
async def test_feedback_without_matching_record_is_noop(store, seeder):
    await seeder.recommendation(10)

    result = await FeedbackService.track_feedback(store, feedback(product_id=99))

    assert result.success is True
    assert result.degraded is False
    records = await records_for(store)
    assert records[0].clicked is False


@pytest.mark.asyncio
async def test_feedback_is_idempotent(store, seeder):
    await seeder.recommendation(10)

    await FeedbackService.track_feedback(store, feedback(action="shown"))
    await FeedbackService.track_feedback(store, feedback(action="shown"))

    records = await records_for(store)
    assert len(records) == 1
    assert records[0].shown is True
    assert records[0].shown_at is not None


@pytest.mark.asyncio
async def test_feedback_matches_customer_before_session(store, seeder):
    await seeder.recommendation(10, session_id="old-session", customer_id=5)
    await seeder.recommendation(10, session_id="sess-1")

    await FeedbackService.track_feedback(store, feedback(customer_id=5, action="purchased"))

    by_customer = await records_for(store, session_id="old-session")
    by_session = await records_for(store, session_id="sess-1")
    assert by_customer[0].purchased is True
    assert by_session[0].purchased is False


@pytest.mark.asyncio
async def test_persist_recommendations_stores_results(store):
    request = RecommendationRequest(tenant_id="store-a", session_id="sess-1", customer_id=3)
    results = [
        RecommendationResult(product_id=1, score=0.61234567, type=RecommendationType.HYBRID,
                             reasons=["Trending this week", "You viewed this recently"]),
        RecommendationResult(product_id=2, score=0.1, type=RecommendationType.HYBRID,
                             reasons=["Trending this week"]),
    ]

    outcome = await FeedbackService.persist_recommendations(store, request, results)

    assert outcome.degraded is False
    records = await records_for(store)
    assert [(r.product_id, r.customer_id) for r in records] == [(1, 3), (2, 3)]
    assert records[0].score == pytest.approx(0.6123)
    assert records[0].reasons == ["Trending this week", "You viewed this recently"]
    assert records[0].recommendation_type == RecommendationType.HYBRID
    assert records[0].shown is False


@pytest.mark.asyncio
async def test_feedback_degrades_on_storage_failure(broken_store):
    result = await FeedbackService.track_feedback(broken_store, feedback())

    assert result.success is True
    assert result.degraded is True
