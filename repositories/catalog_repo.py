"""
商品类目数据访问存储库（只读）
"""

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import BehaviorEventOrm, ProductCategoryMappingOrm
from utils import get_component_logger

logger = get_component_logger(__name__, "CatalogRepository")


class CatalogRepository:

    @staticmethod
    async def get_top_categories(
        product_ids: Sequence[int],
        limit: int,
        session: AsyncSession
    ) -> list[int]:
        """商品所属类目按出现次数降序取前 limit 个"""
        if not product_ids:
            return []

        occurrences = func.count().label("occurrences")
        stmt = (
            select(ProductCategoryMappingOrm.category_id, occurrences)
            .where(ProductCategoryMappingOrm.product_id.in_(product_ids))
            .group_by(ProductCategoryMappingOrm.category_id)
            .order_by(occurrences.desc(), ProductCategoryMappingOrm.category_id)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [row.category_id for row in result.all()]

    @staticmethod
    async def get_products_in_categories(
        category_ids: Sequence[int],
        exclude_product_ids: Sequence[int],
        limit: int,
        session: AsyncSession
    ) -> list[tuple[int, int]]:
        """
        指定类目下的商品

        返回:
            list[tuple[int, int]]: (商品ID, 命中的类目数)，按命中数降序、商品ID升序
        """
        if not category_ids:
            return []

        matching = func.count().label("matching")
        stmt = (
            select(ProductCategoryMappingOrm.product_id, matching)
            .where(ProductCategoryMappingOrm.category_id.in_(category_ids))
            .group_by(ProductCategoryMappingOrm.product_id)
            .order_by(matching.desc(), ProductCategoryMappingOrm.product_id)
            .limit(limit)
        )
        if exclude_product_ids:
            stmt = stmt.where(ProductCategoryMappingOrm.product_id.not_in(exclude_product_ids))

        result = await session.execute(stmt)
        return [(row.product_id, row.matching) for row in result.all()]

    @staticmethod
    async def count_customer_events_by_category(
        customer_id: int,
        session: AsyncSession
    ) -> list[tuple[int, int]]:
        """
        客户行为事件按商品类目计数

        返回:
            list[tuple[int, int]]: (类目ID, 事件数)，按事件数降序
        """
        event_count = func.count().label("event_count")
        stmt = (
            select(ProductCategoryMappingOrm.category_id, event_count)
            .select_from(BehaviorEventOrm)
            .join(
                ProductCategoryMappingOrm,
                BehaviorEventOrm.product_id == ProductCategoryMappingOrm.product_id
            )
            .where(BehaviorEventOrm.customer_id == customer_id)
            .group_by(ProductCategoryMappingOrm.category_id)
            .order_by(event_count.desc(), ProductCategoryMappingOrm.category_id)
        )
        result = await session.execute(stmt)
        return [(row.category_id, row.event_count) for row in result.all()]
