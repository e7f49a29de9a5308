"""
商品浏览数据访问存储库
"""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import ProductView, ProductViewOrm
from utils import get_component_logger

logger = get_component_logger(__name__, "ProductViewRepository")


def _visitor_filter(customer_id: Optional[int], session_id: str):
    # 有客户身份时按客户匹配，否则按会话匹配
    if customer_id is not None:
        return ProductViewOrm.customer_id == customer_id
    return ProductViewOrm.session_id == session_id


class ProductViewRepository:

    @staticmethod
    async def insert_view(view: ProductView, session: AsyncSession) -> ProductViewOrm:
        """写入一条商品浏览记录"""
        view_orm = view.to_orm()
        session.add(view_orm)
        await session.flush()
        logger.debug(f"记录商品浏览: session={view.session_id}, product={view.product_id}")
        return view_orm

    @staticmethod
    async def get_recent_product_ids(
        customer_id: Optional[int],
        session_id: str,
        limit: int,
        session: AsyncSession
    ) -> list[int]:
        """最近 limit 条浏览记录对应的商品ID（保持时间倒序，可能重复）"""
        stmt = (
            select(ProductViewOrm.product_id)
            .where(_visitor_filter(customer_id, session_id))
            .order_by(ProductViewOrm.timestamp.desc(), ProductViewOrm.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_recently_viewed(
        customer_id: Optional[int],
        session_id: str,
        since: datetime,
        exclude_product_ids: Sequence[int],
        limit: int,
        session: AsyncSession
    ) -> list[tuple[int, datetime]]:
        """
        时间窗口内浏览过的商品

        返回:
            list[tuple[int, datetime]]: (商品ID, 最近浏览时间)，按最近浏览时间降序
        """
        last_viewed = func.max(ProductViewOrm.timestamp).label("last_viewed")
        stmt = (
            select(ProductViewOrm.product_id, last_viewed)
            .where(
                _visitor_filter(customer_id, session_id),
                ProductViewOrm.timestamp > since
            )
            .group_by(ProductViewOrm.product_id)
            .order_by(last_viewed.desc(), ProductViewOrm.product_id)
            .limit(limit)
        )
        if exclude_product_ids:
            stmt = stmt.where(ProductViewOrm.product_id.not_in(exclude_product_ids))

        result = await session.execute(stmt)
        return [(row.product_id, row.last_viewed) for row in result.all()]

    @staticmethod
    async def list_views(session_id: str, session: AsyncSession) -> list[ProductView]:
        """列出会话的浏览记录"""
        stmt = (
            select(ProductViewOrm)
            .where(ProductViewOrm.session_id == session_id)
            .order_by(ProductViewOrm.timestamp, ProductViewOrm.id)
        )
        result = await session.execute(stmt)
        return [ProductView.to_model(row) for row in result.scalars().all()]
