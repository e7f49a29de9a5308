"""
推荐服务门面

对外提供推荐引擎的进程内接口。每个操作先通过 TenantDataRouter 解析租户
（租户解析错误直接抛出），再委派给对应的策略或服务。

推荐生成在租户解析之后不会抛出异常，最坏情况返回空列表。
"""

from typing import Optional

from config import AppConfig, rec_config
from core.recommendation import BaseStrategy, create_strategies
from infra import TenantDataRouter
from libs.exceptions import RecommendationValidationException
from models import CustomerPreference, RecommendationResult, RecommendationType
from schemas import (
    AnalyticsRow,
    BestEffortResult,
    RecommendationFeedbackRequest,
    RecommendationRequest,
    TrackBehaviorRequest,
    TrackProductViewRequest
)
from utils import LoggerMixin, get_current_datetime, get_processing_time_ms
from .analytics_service import AnalyticsService
from .behavior_service import BehaviorService
from .feedback_service import FeedbackService
from .preference_service import PreferenceService


class RecommendationService(LoggerMixin):
    """
    推荐引擎门面

    参数:
        router: 租户数据路由器
        settings: 应用配置，为None时使用全局配置
    """

    def __init__(self, router: TenantDataRouter, settings: Optional[AppConfig] = None):
        self.router = router
        self.settings = settings or rec_config
        self.strategies: dict[RecommendationType, BaseStrategy] = create_strategies(self.settings)

    async def generate_recommendations(self, request: RecommendationRequest) -> list[RecommendationResult]:
        """
        生成推荐

        参数:
            request: 推荐请求，type 为空或 hybrid 时使用混合推荐

        返回:
            list[RecommendationResult]: 不超过 limit 条、按分数降序的推荐结果
        """
        store = await self.router.resolve(request.tenant_id)

        start_time = get_current_datetime()
        results = await self.strategies[request.type].safe_generate(store, request)

        self.logger.info(
            f"生成推荐完成: tenant={request.tenant_id}, type={request.type}, "
            f"条数={len(results)}, 耗时={get_processing_time_ms(start_time):.1f}ms"
        )

        if request.persist:
            await FeedbackService.persist_recommendations(store, request, results)
        return results

    async def track_behavior(self, request: TrackBehaviorRequest) -> BestEffortResult:
        """记录客户行为（尽力而为）"""
        store = await self.router.resolve(request.tenant_id)
        return await BehaviorService.track_behavior(store, request)

    async def track_product_view(self, request: TrackProductViewRequest) -> BestEffortResult:
        """记录商品浏览（尽力而为）"""
        store = await self.router.resolve(request.tenant_id)
        return await BehaviorService.track_product_view(store, request)

    async def track_recommendation_feedback(self, request: RecommendationFeedbackRequest) -> BestEffortResult:
        """记录推荐反馈（尽力而为，无匹配记录时静默忽略）"""
        store = await self.router.resolve(request.tenant_id)
        return await FeedbackService.track_feedback(store, request)

    async def get_recommendation_analytics(self, tenant_id: str, days: Optional[int] = None) -> list[AnalyticsRow]:
        """
        获取推荐效果分析

        参数:
            tenant_id: 租户ID
            days: 统计窗口（天），默认 ANALYTICS_DEFAULT_DAYS
        """
        window = self.settings.ANALYTICS_DEFAULT_DAYS if days is None else days
        if window < 1:
            raise RecommendationValidationException(f"days 必须大于等于 1，当前为 {window}")

        store = await self.router.resolve(tenant_id)
        return await AnalyticsService.get_analytics(store, window)

    async def update_customer_preferences(self, tenant_id: str, customer_id: int) -> BestEffortResult:
        """重新计算客户类目偏好（尽力而为）"""
        store = await self.router.resolve(tenant_id)
        return await PreferenceService.update_preferences(store, customer_id)

    async def get_customer_preferences(self, tenant_id: str, customer_id: int) -> list[CustomerPreference]:
        """获取客户已保存的偏好"""
        store = await self.router.resolve(tenant_id)
        return await PreferenceService.get_preferences(store, customer_id)
