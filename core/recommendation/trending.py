"""
热门趋势策略

统计时间窗口内的浏览与购买事件，按加权热度排序，并以最高热度归一化，
排名第一的商品得分恰好为 1.0。
"""

from infra import TenantDatabase
from models import RecommendationResult, RecommendationType
from repositories import BehaviorRepository
from schemas import RecommendationRequest
from utils import days_ago
from .base import BaseStrategy


class TrendingStrategy(BaseStrategy):
    """热门趋势：score = 热度 / 最高热度"""

    recommendation_type = RecommendationType.TRENDING
    reason = "Trending this week"

    async def generate(
        self,
        store: TenantDatabase,
        request: RecommendationRequest
    ) -> list[RecommendationResult]:
        async with store.session() as session:
            trending = await BehaviorRepository.get_trending_products(
                since=days_ago(self.settings.TRENDING_WINDOW_DAYS),
                view_weight=self.settings.TRENDING_VIEW_WEIGHT,
                purchase_weight=self.settings.TRENDING_PURCHASE_WEIGHT,
                min_events=self.settings.TRENDING_MIN_EVENTS,
                exclude_product_ids=request.exclude_product_ids,
                limit=request.limit,
                session=session
            )

        if not trending:
            return []

        max_score = trending[0][1] or 1
        return [self._result(product_id, total / max_score) for product_id, total in trending]
