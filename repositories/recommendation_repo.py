"""
推荐记录数据访问存储库

推荐记录只由反馈更新修改，不提供删除。
"""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import Integer, case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models import FeedbackAction, RecommendationOrm, RecommendationRecord
from utils import get_component_logger

logger = get_component_logger(__name__, "RecommendationRepository")


class RecommendationRepository:

    @staticmethod
    async def insert_recommendations(
        records: Sequence[RecommendationRecord],
        session: AsyncSession
    ) -> int:
        """批量写入推荐记录，返回写入条数"""
        session.add_all([record.to_orm() for record in records])
        await session.flush()
        return len(records)

    @staticmethod
    async def mark_feedback(
        customer_id: Optional[int],
        session_id: str,
        product_id: int,
        action: FeedbackAction,
        at: datetime,
        session: AsyncSession
    ) -> int:
        """
        设置匹配推荐记录的反馈标记

        参数:
            customer_id: 有值时按客户匹配，否则按会话匹配
            action: 反馈动作，对应同名布尔字段与 ``<action>_at`` 时间戳

        返回:
            int: 受影响的记录数
        """
        if customer_id is not None:
            visitor = RecommendationOrm.customer_id == customer_id
        else:
            visitor = RecommendationOrm.session_id == session_id

        stmt = (
            update(RecommendationOrm)
            .where(visitor, RecommendationOrm.product_id == product_id)
            .values({action.value: True, f"{action.value}_at": at})
        )
        result = await session.execute(stmt)
        return result.rowcount

    @staticmethod
    async def aggregate_by_type(since: datetime, session: AsyncSession) -> list[tuple[str, int, int, int]]:
        """
        统计窗口内已展示推荐的效果

        返回:
            list[tuple]: (推荐类型, 展示数, 点击数, 购买数)，每个有展示记录的类型一行
        """
        total_clicked = func.sum(case((RecommendationOrm.clicked.is_(True), 1), else_=0))
        total_purchased = func.sum(case((RecommendationOrm.purchased.is_(True), 1), else_=0))
        stmt = (
            select(
                RecommendationOrm.recommendation_type,
                func.count().label("total_shown"),
                total_clicked.cast(Integer).label("total_clicked"),
                total_purchased.cast(Integer).label("total_purchased"),
            )
            .where(
                RecommendationOrm.shown.is_(True),
                RecommendationOrm.created_at >= since
            )
            .group_by(RecommendationOrm.recommendation_type)
            .order_by(RecommendationOrm.recommendation_type)
        )
        result = await session.execute(stmt)
        return [
            (row.recommendation_type, row.total_shown, row.total_clicked or 0, row.total_purchased or 0)
            for row in result.all()
        ]

    @staticmethod
    async def list_for_visitor(
        session_id: str,
        session: AsyncSession,
        product_id: Optional[int] = None
    ) -> list[RecommendationRecord]:
        """列出会话的推荐记录"""
        stmt = (
            select(RecommendationOrm)
            .where(RecommendationOrm.session_id == session_id)
            .order_by(RecommendationOrm.id)
        )
        if product_id is not None:
            stmt = stmt.where(RecommendationOrm.product_id == product_id)

        result = await session.execute(stmt)
        return [RecommendationRecord.to_model(row) for row in result.scalars().all()]
