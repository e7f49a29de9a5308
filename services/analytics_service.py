"""
推荐效果分析服务

按推荐类型统计窗口内已展示推荐的点击率与转化率。
"""

from infra import TenantDatabase
from libs.exceptions import RecommendationValidationException
from repositories import RecommendationRepository
from schemas import AnalyticsRow
from utils import days_ago, get_component_logger

logger = get_component_logger(__name__, "AnalyticsService")


def _rate(part: int, total: int) -> float:
    return round(part / total * 100, 2) if total else 0.0


class AnalyticsService:

    @staticmethod
    async def get_analytics(store: TenantDatabase, days: int) -> list[AnalyticsRow]:
        """
        统计推荐效果

        参数:
            store: 租户店铺库句柄
            days: 统计窗口（天），必须 >= 1

        返回:
            list[AnalyticsRow]: 每个有展示记录的推荐类型一行；存储异常时返回空列表
        """
        if days < 1:
            raise RecommendationValidationException(f"days 必须大于等于 1，当前为 {days}")

        try:
            async with store.session() as session:
                rows = await RecommendationRepository.aggregate_by_type(days_ago(days), session)
        except Exception as e:
            logger.error(f"获取推荐分析数据失败: {store.masked_url}, 错误: {e}")
            return []

        return [
            AnalyticsRow(
                recommendation_type=recommendation_type,
                total_shown=shown,
                total_clicked=clicked,
                total_purchased=purchased,
                click_through_rate=_rate(clicked, shown),
                conversion_rate=_rate(purchased, shown),
            )
            for recommendation_type, shown, clicked, purchased in rows
        ]
