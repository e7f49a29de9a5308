"""
客户偏好服务

根据客户的历史行为计算类目偏好：强度 = 该类目下的行为事件数 / 客户行为事件总数。
写入为按唯一键覆盖的 upsert，重复计算不会产生重复行。
"""

from infra import TenantDatabase
from models import CustomerPreference, PreferenceType
from repositories import BehaviorRepository, CatalogRepository, PreferenceRepository
from schemas import BestEffortResult
from utils import get_component_logger

logger = get_component_logger(__name__, "PreferenceService")


class PreferenceService:

    @staticmethod
    async def update_preferences(store: TenantDatabase, customer_id: int) -> BestEffortResult:
        """
        重新计算并写入客户的类目偏好

        参数:
            store: 租户店铺库句柄
            customer_id: 客户ID

        返回:
            BestEffortResult: 始终成功，存储失败时 degraded=True
        """
        try:
            async with store.session() as session:
                total = await BehaviorRepository.count_customer_events(customer_id, session)
                if total == 0:
                    return BestEffortResult.ok()

                category_counts = await CatalogRepository.count_customer_events_by_category(customer_id, session)
                preferences = [
                    CustomerPreference(
                        customer_id=customer_id,
                        preference_type=PreferenceType.CATEGORY.value,
                        preference_value=str(category_id),
                        strength=round(count / total, 4),
                    )
                    for category_id, count in category_counts
                ]
                await PreferenceRepository.upsert_preferences(preferences, session)

            logger.debug(f"更新客户偏好: customer={customer_id}, 类目数={len(preferences)}")
            return BestEffortResult.ok()
        except Exception as e:
            logger.error(f"更新客户偏好失败: {store.masked_url}, customer={customer_id}, 错误: {e}")
            return BestEffortResult.degrade(e)

    @staticmethod
    async def get_preferences(store: TenantDatabase, customer_id: int) -> list[CustomerPreference]:
        """客户已保存的偏好，按强度降序"""
        async with store.session() as session:
            return await PreferenceRepository.get_preferences(customer_id, session)
