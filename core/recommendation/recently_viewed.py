"""
最近浏览策略

按最近浏览时间倒序返回访客浏览过的商品，分数从 0.9 起每名递减 0.1，最低 0.1。
"""

from infra import TenantDatabase
from models import RecommendationResult, RecommendationType
from repositories import ProductViewRepository
from schemas import RecommendationRequest
from utils import days_ago
from .base import BaseStrategy


def recency_score(rank: int) -> float:
    """名次对应的分数：rank 0 -> 0.9，rank 1 -> 0.8，... 最低 0.1"""
    return round(max(0.9 - 0.1 * rank, 0.1), 4)


class RecentlyViewedStrategy(BaseStrategy):

    recommendation_type = RecommendationType.RECENTLY_VIEWED
    reason = "You viewed this recently"

    async def generate(
        self,
        store: TenantDatabase,
        request: RecommendationRequest
    ) -> list[RecommendationResult]:
        async with store.session() as session:
            viewed = await ProductViewRepository.get_recently_viewed(
                request.customer_id,
                request.session_id,
                days_ago(self.settings.RECENTLY_VIEWED_WINDOW_DAYS),
                request.exclude_product_ids,
                request.limit,
                session
            )

        return [
            self._result(product_id, recency_score(rank))
            for rank, (product_id, _) in enumerate(viewed)
        ]
