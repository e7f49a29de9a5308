"""
客户偏好数据访问存储库

偏好写入使用数据库原生 upsert（INSERT ... ON CONFLICT DO UPDATE），
按店铺库方言选择 PostgreSQL 或 SQLite 的 insert 构造。
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from models import CustomerPreference, CustomerPreferenceOrm
from utils import get_component_logger, get_current_datetime

logger = get_component_logger(__name__, "PreferenceRepository")

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class PreferenceRepository:

    @staticmethod
    async def upsert_preferences(
        preferences: Sequence[CustomerPreference],
        session: AsyncSession
    ) -> int:
        """
        按 (customer_id, preference_type, preference_value) 写入或覆盖偏好强度

        返回:
            int: 处理的偏好条数
        """
        if not preferences:
            return 0

        dialect_name = session.bind.dialect.name
        dialect_insert = _DIALECT_INSERTS.get(dialect_name)
        if dialect_insert is None:
            raise NotImplementedError(f"不支持的数据库方言: {dialect_name}")

        now = get_current_datetime()
        stmt = dialect_insert(CustomerPreferenceOrm).values([
            {
                "customer_id": pref.customer_id,
                "preference_type": pref.preference_type,
                "preference_value": pref.preference_value,
                "strength": pref.strength,
                "created_at": now,
                "updated_at": now,
            }
            for pref in preferences
        ])
        stmt = stmt.on_conflict_do_update(
            index_elements=["customer_id", "preference_type", "preference_value"],
            set_={
                "strength": stmt.excluded.strength,
                "updated_at": stmt.excluded.updated_at,
            }
        )
        await session.execute(stmt)
        logger.debug(f"写入客户偏好: customer={preferences[0].customer_id}, 条数={len(preferences)}")
        return len(preferences)

    @staticmethod
    async def get_preferences(customer_id: int, session: AsyncSession) -> list[CustomerPreference]:
        """客户偏好，按强度降序"""
        stmt = (
            select(CustomerPreferenceOrm)
            .where(CustomerPreferenceOrm.customer_id == customer_id)
            .order_by(
                CustomerPreferenceOrm.strength.desc(),
                CustomerPreferenceOrm.preference_type,
                CustomerPreferenceOrm.preference_value
            )
        )
        result = await session.execute(stmt)
        return [CustomerPreference.to_model(row) for row in result.scalars().all()]
