"""
租户目录数据访问存储库

提供纯粹的数据访问操作:
- 租户目录CRUD操作（目录库）
- 租户记录的 Redis 缓存（msgpack 序列化）
- 依赖注入，支持外部会话管理
"""

from typing import Optional

import msgpack
from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config import rec_config
from models import TenantModel, TenantOrm
from utils import get_component_logger

logger = get_component_logger(__name__, "TenantRepository")


class TenantRepository:

    @staticmethod
    async def get_tenant_by_id(tenant_id: str, session: AsyncSession) -> Optional[TenantModel]:
        """根据ID获取租户"""
        try:
            stmt = select(TenantOrm).where(TenantOrm.tenant_id == tenant_id)
            result = await session.execute(stmt)
            tenant_orm = result.scalar_one_or_none()
            return TenantModel.to_model(tenant_orm) if tenant_orm else None
        except Exception as e:
            logger.error(f"获取租户失败: {tenant_id}, 错误: {e}")
            raise

    @staticmethod
    async def get_tenant_by_subdomain(subdomain: str, session: AsyncSession) -> Optional[TenantModel]:
        """根据子域名获取租户"""
        try:
            stmt = select(TenantOrm).where(TenantOrm.subdomain == subdomain.strip().lower())
            result = await session.execute(stmt)
            tenant_orm = result.scalar_one_or_none()
            return TenantModel.to_model(tenant_orm) if tenant_orm else None
        except Exception as e:
            logger.error(f"按子域名获取租户失败: {subdomain}, 错误: {e}")
            raise

    @staticmethod
    async def insert_tenant(tenant: TenantModel, session: AsyncSession) -> str:
        """创建租户"""
        try:
            session.add(tenant.to_orm())
            await session.flush()
            logger.debug(f"创建租户: {tenant.tenant_id}")
            return tenant.tenant_id
        except Exception as e:
            logger.error(f"创建租户失败: {tenant.tenant_id}, 错误: {e}")
            raise

    @staticmethod
    async def get_tenant_cache(tenant_id: str, redis_client: Redis) -> Optional[TenantModel]:
        """获取租户缓存"""
        try:
            redis_key = f"tenant:{tenant_id}"
            tenant_data = await redis_client.get(redis_key)

            if tenant_data:
                tenant_data = msgpack.unpackb(tenant_data, raw=False)
                return TenantModel(**tenant_data)
            return None
        except RedisError as e:
            logger.error(f"redis 命令执行失败: {e}")
            raise
        except Exception as e:
            logger.error(f"获取租户缓存失败: {tenant_id}, 错误: {e}")
            raise

    @staticmethod
    async def update_tenant_cache(
        tenant_model: TenantModel,
        redis_client: Redis,
        ttl: Optional[int] = None
    ):
        """更新租户缓存"""
        try:
            redis_key = f"tenant:{tenant_model.tenant_id}"
            tenant_data = tenant_model.model_dump(mode='json')

            await redis_client.setex(
                redis_key,
                ttl or rec_config.REDIS_TTL,
                msgpack.packb(tenant_data),
            )
            logger.debug(f"更新租户缓存: {tenant_model.tenant_id}")
        except RedisError as e:
            logger.error(f"redis 命令执行失败: {e}")
            raise
        except Exception as e:
            logger.error(f"更新租户缓存失败: {tenant_model.tenant_id}, 错误: {e}")
            raise
