"""
推荐反馈服务

- 持久化推荐结果，供后续反馈追踪
- 记录 shown / clicked / purchased 反馈

两者都是尽力而为：异常只记录日志并以降级结果返回。
没有匹配的推荐记录时反馈静默忽略。
"""

from typing import Sequence

from infra import TenantDatabase
from models import RecommendationRecord, RecommendationResult
from repositories import RecommendationRepository
from schemas import BestEffortResult, RecommendationFeedbackRequest, RecommendationRequest
from utils import get_component_logger, get_current_datetime

logger = get_component_logger(__name__, "FeedbackService")


class FeedbackService:

    @staticmethod
    async def persist_recommendations(
        store: TenantDatabase,
        request: RecommendationRequest,
        results: Sequence[RecommendationResult]
    ) -> BestEffortResult:
        """
        将推荐结果写入推荐记录表

        参数:
            store: 租户店铺库句柄
            request: 原推荐请求（提供客户与会话）
            results: 推荐结果

        返回:
            BestEffortResult: 始终成功，存储失败时 degraded=True
        """
        if not results:
            return BestEffortResult.ok()

        records = [
            RecommendationRecord.from_result(result, request.session_id, request.customer_id)
            for result in results
        ]
        try:
            async with store.session() as session:
                count = await RecommendationRepository.insert_recommendations(records, session)
            logger.debug(f"持久化推荐结果: tenant={request.tenant_id}, 条数={count}")
            return BestEffortResult.ok()
        except Exception as e:
            logger.error(f"持久化推荐结果失败: tenant={request.tenant_id}, session={request.session_id}, 错误: {e}")
            return BestEffortResult.degrade(e)

    @staticmethod
    async def track_feedback(store: TenantDatabase, request: RecommendationFeedbackRequest) -> BestEffortResult:
        """
        设置匹配推荐记录的反馈标记与时间戳

        有客户ID时按客户匹配，否则按会话匹配；重复调用只会刷新时间戳。
        """
        try:
            async with store.session() as session:
                updated = await RecommendationRepository.mark_feedback(
                    request.customer_id,
                    request.session_id,
                    request.product_id,
                    request.action,
                    get_current_datetime(),
                    session
                )
        except Exception as e:
            logger.error(
                f"记录推荐反馈失败: tenant={request.tenant_id}, session={request.session_id}, "
                f"product={request.product_id}, 错误: {e}"
            )
            return BestEffortResult.degrade(e)

        if updated == 0:
            logger.debug(
                f"没有匹配的推荐记录，忽略反馈: tenant={request.tenant_id}, "
                f"session={request.session_id}, product={request.product_id}"
            )
        return BestEffortResult.ok()
