"""
客户行为数据访问存储库

行为日志只追加：本存储库只提供写入与聚合查询，不提供更新或删除。
所有时间窗口由调用方计算后作为绑定参数传入。
"""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import BehaviorAction, BehaviorEvent, BehaviorEventOrm
from utils import get_component_logger

logger = get_component_logger(__name__, "BehaviorRepository")


class BehaviorRepository:

    @staticmethod
    async def insert_event(event: BehaviorEvent, session: AsyncSession) -> BehaviorEventOrm:
        """追加一条行为事件"""
        event_orm = event.to_orm()
        session.add(event_orm)
        await session.flush()
        logger.debug(f"记录行为事件: session={event.session_id}, action={event.action}")
        return event_orm

    @staticmethod
    async def count_customer_events(customer_id: int, session: AsyncSession) -> int:
        """客户的行为事件总数"""
        stmt = (
            select(func.count())
            .select_from(BehaviorEventOrm)
            .where(BehaviorEventOrm.customer_id == customer_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    @staticmethod
    async def get_purchased_product_ids(customer_id: int, session: AsyncSession) -> list[int]:
        """客户购买过的商品ID（去重）"""
        stmt = (
            select(BehaviorEventOrm.product_id)
            .where(
                BehaviorEventOrm.customer_id == customer_id,
                BehaviorEventOrm.action == BehaviorAction.PURCHASE,
                BehaviorEventOrm.product_id.is_not(None)
            )
            .distinct()
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_similar_customers(
        customer_id: int,
        product_ids: Sequence[int],
        limit: int,
        session: AsyncSession
    ) -> list[tuple[int, int]]:
        """
        查找购买行为相似的客户

        参数:
            customer_id: 目标客户ID（结果中排除）
            product_ids: 目标客户购买过的商品
            limit: 返回的相似客户上限

        返回:
            list[tuple[int, int]]: (客户ID, 在这些商品上的购买记录数)，
            仅包含记录数大于1的客户，按记录数降序
        """
        if not product_ids:
            return []

        overlap = func.count().label("overlap")
        stmt = (
            select(BehaviorEventOrm.customer_id, overlap)
            .where(
                BehaviorEventOrm.action == BehaviorAction.PURCHASE,
                BehaviorEventOrm.product_id.in_(product_ids),
                BehaviorEventOrm.customer_id.is_not(None),
                BehaviorEventOrm.customer_id != customer_id
            )
            .group_by(BehaviorEventOrm.customer_id)
            .having(func.count() > 1)
            .order_by(overlap.desc(), BehaviorEventOrm.customer_id)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [(row.customer_id, row.overlap) for row in result.all()]

    @staticmethod
    async def get_products_purchased_by(
        customer_ids: Sequence[int],
        exclude_product_ids: Sequence[int],
        limit: int,
        session: AsyncSession
    ) -> list[tuple[int, int]]:
        """
        统计指定客户群购买的商品

        返回:
            list[tuple[int, int]]: (商品ID, 购买记录数)，按记录数降序、商品ID升序
        """
        if not customer_ids:
            return []

        purchase_count = func.count().label("purchase_count")
        stmt = (
            select(BehaviorEventOrm.product_id, purchase_count)
            .where(
                BehaviorEventOrm.action == BehaviorAction.PURCHASE,
                BehaviorEventOrm.customer_id.in_(customer_ids),
                BehaviorEventOrm.product_id.is_not(None)
            )
            .group_by(BehaviorEventOrm.product_id)
            .order_by(purchase_count.desc(), BehaviorEventOrm.product_id)
            .limit(limit)
        )
        if exclude_product_ids:
            stmt = stmt.where(BehaviorEventOrm.product_id.not_in(exclude_product_ids))

        result = await session.execute(stmt)
        return [(row.product_id, row.purchase_count) for row in result.all()]

    @staticmethod
    async def get_trending_products(
        since: datetime,
        view_weight: int,
        purchase_weight: int,
        min_events: int,
        exclude_product_ids: Sequence[int],
        limit: int,
        session: AsyncSession
    ) -> list[tuple[int, int]]:
        """
        统计时间窗口内的商品热度

        热度 = 浏览数 × view_weight + 购买数 × purchase_weight，
        只统计浏览与购买事件，事件数不足 min_events 的商品不入选。

        返回:
            list[tuple[int, int]]: (商品ID, 热度)，按热度降序、商品ID升序
        """
        total_score = func.sum(
            case(
                (BehaviorEventOrm.action == BehaviorAction.VIEW, view_weight),
                (BehaviorEventOrm.action == BehaviorAction.PURCHASE, purchase_weight),
                else_=0
            )
        ).label("total_score")

        stmt = (
            select(BehaviorEventOrm.product_id, total_score)
            .where(
                BehaviorEventOrm.timestamp > since,
                BehaviorEventOrm.action.in_([BehaviorAction.VIEW, BehaviorAction.PURCHASE]),
                BehaviorEventOrm.product_id.is_not(None)
            )
            .group_by(BehaviorEventOrm.product_id)
            .having(func.count() >= min_events)
            .order_by(total_score.desc(), BehaviorEventOrm.product_id)
            .limit(limit)
        )
        if exclude_product_ids:
            stmt = stmt.where(BehaviorEventOrm.product_id.not_in(exclude_product_ids))

        result = await session.execute(stmt)
        return [(row.product_id, int(row.total_score)) for row in result.all()]

    @staticmethod
    async def list_events(
        session: AsyncSession,
        session_id: Optional[str] = None,
        customer_id: Optional[int] = None
    ) -> list[BehaviorEvent]:
        """按会话或客户列出行为事件，按时间升序"""
        stmt = select(BehaviorEventOrm).order_by(BehaviorEventOrm.timestamp, BehaviorEventOrm.id)
        if session_id is not None:
            stmt = stmt.where(BehaviorEventOrm.session_id == session_id)
        if customer_id is not None:
            stmt = stmt.where(BehaviorEventOrm.customer_id == customer_id)

        result = await session.execute(stmt)
        return [BehaviorEvent.to_model(row) for row in result.scalars().all()]
