"""
协同过滤策略

找出与目标客户购买行为相似的客户（在目标客户购买过的商品上有多于一条
购买记录），推荐这些客户购买过而目标客户未购买的商品。
"""

from infra import TenantDatabase
from models import RecommendationResult, RecommendationType
from repositories import BehaviorRepository
from schemas import RecommendationRequest
from .base import BaseStrategy


class CollaborativeStrategy(BaseStrategy):
    """协同过滤：score = min(购买记录数 / 10, 1)"""

    recommendation_type = RecommendationType.COLLABORATIVE
    reason = "Customers like you also purchased this"

    async def generate(
        self,
        store: TenantDatabase,
        request: RecommendationRequest
    ) -> list[RecommendationResult]:
        # 匿名访客无法协同
        if request.customer_id is None:
            return []

        async with store.session() as session:
            purchased = await BehaviorRepository.get_purchased_product_ids(request.customer_id, session)
            if not purchased:
                return []

            similar = await BehaviorRepository.get_similar_customers(
                request.customer_id,
                purchased,
                self.settings.COLLABORATIVE_MAX_SIMILAR,
                session
            )
            if not similar:
                return []

            candidates = await BehaviorRepository.get_products_purchased_by(
                [customer_id for customer_id, _ in similar],
                [*purchased, *request.exclude_product_ids],
                request.limit,
                session
            )

        divisor = self.settings.COLLABORATIVE_SCORE_DIVISOR
        return [
            self._result(product_id, min(count / divisor, 1.0))
            for product_id, count in candidates
        ]
