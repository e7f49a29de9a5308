"""
基于内容的推荐策略

取访客最近浏览的商品，统计其所属类目，推荐出现最多的几个类目下的其他商品。
"""

from infra import TenantDatabase
from models import RecommendationResult, RecommendationType
from repositories import CatalogRepository, ProductViewRepository
from schemas import RecommendationRequest
from .base import BaseStrategy


class ContentBasedStrategy(BaseStrategy):
    """基于内容：score = min(命中类目数 / CONTENT_TOP_CATEGORIES, 1)"""

    recommendation_type = RecommendationType.CONTENT_BASED
    reason = "Similar to products you viewed"

    async def generate(
        self,
        store: TenantDatabase,
        request: RecommendationRequest
    ) -> list[RecommendationResult]:
        top_n = self.settings.CONTENT_TOP_CATEGORIES

        async with store.session() as session:
            recent = await ProductViewRepository.get_recent_product_ids(
                request.customer_id,
                request.session_id,
                self.settings.CONTENT_RECENT_VIEWS,
                session
            )
            if not recent:
                return []

            viewed = list(dict.fromkeys(recent))
            categories = await CatalogRepository.get_top_categories(viewed, top_n, session)
            if not categories:
                return []

            candidates = await CatalogRepository.get_products_in_categories(
                categories,
                [*viewed, *request.exclude_product_ids],
                request.limit,
                session
            )

        return [
            self._result(product_id, min(matching / top_n, 1.0))
            for product_id, matching in candidates
        ]
