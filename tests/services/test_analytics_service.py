"""
推荐效果分析服务测试
"""

from datetime import timedelta

import pytest

from libs.exceptions import RecommendationValidationException
from models import RecommendationType
from services import AnalyticsService
from utils import get_current_datetime


@pytest.mark.asyncio
async def test_rates_for_trending(store, seeder):
    """10 条已展示的 trending 推荐，3 条点击、1 条购买"""
    for index in range(10):
        await seeder.recommendation(
            product_id=index,
            recommendation_type=RecommendationType.TRENDING,
            shown=True,
            clicked=index < 3,
            purchased=index == 0,
        )

    rows = await AnalyticsService.get_analytics(store, days=30)

    assert len(rows) == 1
    row = rows[0]
    assert row.recommendation_type == RecommendationType.TRENDING
    assert (row.total_shown, row.total_clicked, row.total_purchased) == (10, 3, 1)
    assert row.click_through_rate == 30.00
    assert row.conversion_rate == 10.00


@pytest.mark.asyncio
async def test_rates_rounded_to_two_decimals(store, seeder):
    for index in range(3):
        await seeder.recommendation(index, RecommendationType.HYBRID, shown=True, clicked=index == 0)

    rows = await AnalyticsService.get_analytics(store, days=30)

    assert rows[0].click_through_rate == 33.33
    assert rows[0].conversion_rate == 0.0


@pytest.mark.asyncio
async def test_unshown_and_old_rows_are_excluded(store, seeder):
    await seeder.recommendation(1, RecommendationType.COLLABORATIVE, shown=True, clicked=True)
    await seeder.recommendation(2, RecommendationType.COLLABORATIVE, shown=False, clicked=True)
    await seeder.recommendation(
        3, RecommendationType.COLLABORATIVE, shown=True,
        created_at=get_current_datetime() - timedelta(days=45)
    )
    # 只有未展示记录的类型不出现在结果中
    await seeder.recommendation(4, RecommendationType.CONTENT_BASED, shown=False)

    rows = await AnalyticsService.get_analytics(store, days=30)

    assert [(r.recommendation_type, r.total_shown, r.total_clicked) for r in rows] == [
        (RecommendationType.COLLABORATIVE, 1, 1)
    ]


@pytest.mark.asyncio
async def test_no_activity_returns_empty(store):
    assert await AnalyticsService.get_analytics(store, days=7) == []


@pytest.mark.asyncio
async def test_days_must_be_positive(store):
    with pytest.raises(RecommendationValidationException) as exc_info:
        await AnalyticsService.get_analytics(store, days=0)

    assert exc_info.value.http_status_code == 422


@pytest.mark.asyncio
async def test_storage_failure_returns_empty(broken_store):
    assert await AnalyticsService.get_analytics(broken_store, days=30) == []
