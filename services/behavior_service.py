"""
客户行为追踪服务

行为与浏览追踪是尽力而为的写入：存储异常只记录日志，
以降级结果返回，不会中断调用方的浏览或购买流程。
"""

from infra import TenantDatabase
from models import BehaviorAction, BehaviorEvent, ProductView
from repositories import BehaviorRepository, ProductViewRepository
from schemas import BestEffortResult, TrackBehaviorRequest, TrackProductViewRequest
from utils import get_component_logger

logger = get_component_logger(__name__, "BehaviorService")


class BehaviorService:

    @staticmethod
    async def track_behavior(store: TenantDatabase, request: TrackBehaviorRequest) -> BestEffortResult:
        """
        追加一条客户行为事件

        参数:
            store: 租户店铺库句柄
            request: 行为追踪请求

        返回:
            BestEffortResult: 始终成功，存储失败时 degraded=True
        """
        event = BehaviorEvent(
            customer_id=request.customer_id,
            session_id=request.session_id,
            action=request.action,
            product_id=request.product_id,
            search_query=request.search_query,
            category=request.category,
            time_spent=request.time_spent,
            metadata=request.metadata,
            device_type=request.device_type,
            source=request.source,
        )

        try:
            async with store.session() as session:
                await BehaviorRepository.insert_event(event, session)
            return BestEffortResult.ok()
        except Exception as e:
            logger.error(
                f"记录客户行为失败: tenant={request.tenant_id}, session={request.session_id}, "
                f"action={request.action}, 错误: {e}"
            )
            return BestEffortResult.degrade(e)

    @staticmethod
    async def track_product_view(store: TenantDatabase, request: TrackProductViewRequest) -> BestEffortResult:
        """
        记录商品浏览，并以 view 行为事件同步记录停留时长

        返回:
            BestEffortResult: 始终成功，存储失败时 degraded=True
        """
        view = ProductView(
            customer_id=request.customer_id,
            session_id=request.session_id,
            product_id=request.product_id,
            view_duration=request.view_duration,
            referrer=request.referrer,
        )

        try:
            async with store.session() as session:
                await ProductViewRepository.insert_view(view, session)
        except Exception as e:
            logger.error(
                f"记录商品浏览失败: tenant={request.tenant_id}, session={request.session_id}, "
                f"product={request.product_id}, 错误: {e}"
            )
            return BestEffortResult.degrade(e)

        return await BehaviorService.track_behavior(
            store,
            TrackBehaviorRequest(
                tenant_id=request.tenant_id,
                session_id=request.session_id,
                customer_id=request.customer_id,
                product_id=request.product_id,
                action=BehaviorAction.VIEW,
                time_spent=request.view_duration,
            )
        )
