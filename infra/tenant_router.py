"""
租户数据路由

将租户标识解析为该租户独立数据库的访问句柄（TenantDatabase）。
句柄按数据库连接串缓存复用；同一租户的并发首次解析在锁内双重检查，
只有一个协程创建句柄，其余复用。

路由器由应用生命周期创建并注入推荐服务，关闭时统一释放所有引擎。
"""

import asyncio
from typing import Any, Optional

from redis.exceptions import RedisError

from libs.exceptions import (
    TenantDisabledException,
    TenantIdRequiredException,
    TenantNotFoundException
)
from models import TenantModel
from repositories.tenant_repo import TenantRepository
from utils import get_component_logger
from .registry import InfraRegistry
from .tenant_db import TenantDatabase

logger = get_component_logger(__name__, "TenantDataRouter")


class TenantDataRouter:
    """
    租户数据路由器

    参数:
        registry: 基础设施注册表，提供目录库会话与 Redis 客户端
        cache_tenants: 是否使用 Redis 缓存租户目录记录，为None时读取配置
    """

    def __init__(self, registry: InfraRegistry, cache_tenants: Optional[bool] = None):
        self.registry = registry
        self.settings = registry.settings
        self.cache_tenants = (
            self.settings.TENANT_CACHE_ENABLED if cache_tenants is None else cache_tenants
        )

        self._handles: dict[str, TenantDatabase] = {}
        self._registered: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def resolve(self, tenant_id: str) -> TenantDatabase:
        """
        解析租户数据库句柄

        参数:
            tenant_id: 租户ID

        返回:
            TenantDatabase: 租户独立数据库句柄

        异常:
            TenantIdRequiredException: 租户ID为空
            TenantNotFoundException: 租户不存在或已删除
            TenantDisabledException: 租户存在但已暂停或关闭
        """
        if not tenant_id or not tenant_id.strip():
            raise TenantIdRequiredException()

        database_url = self._registered.get(tenant_id)
        if database_url is None:
            tenant = await self._lookup_tenant(tenant_id)
            database_url = self._ensure_available(tenant, tenant_id)

        return await self._get_or_create(database_url)

    async def resolve_by_subdomain(self, subdomain: str) -> TenantDatabase:
        """
        根据店铺子域名解析租户数据库句柄

        参数:
            subdomain: 店铺子域名

        返回:
            TenantDatabase: 租户独立数据库句柄
        """
        if not subdomain or not subdomain.strip():
            raise TenantIdRequiredException()

        async with self.registry.db_session() as session:
            tenant = await TenantRepository.get_tenant_by_subdomain(subdomain, session)

        database_url = self._ensure_available(tenant, subdomain)
        return await self._get_or_create(database_url)

    async def register(self, tenant_id: str, database_url: str) -> TenantDatabase:
        """
        直接登记租户与数据库连接串（供工具与测试使用，不查询目录库）

        参数:
            tenant_id: 租户ID
            database_url: 租户数据库连接串

        返回:
            TenantDatabase: 租户独立数据库句柄
        """
        if not tenant_id or not tenant_id.strip():
            raise TenantIdRequiredException()

        self._registered[tenant_id] = database_url
        return await self._get_or_create(database_url)

    async def close_all(self) -> None:
        """释放所有缓存的数据库句柄"""
        async with self._lock:
            handles = list(self._handles.values())
            self._handles.clear()

        for handle in handles:
            try:
                await handle.dispose()
            except Exception as e:
                logger.error(f"释放店铺数据库连接失败: {handle.masked_url}, 错误: {e}")

        logger.info(f"已关闭 {len(handles)} 个店铺数据库连接")

    async def health_check(self) -> dict[str, Any]:
        """
        对目录库与每个已缓存的店铺数据库执行 SELECT 1

        返回:
            dict: {"directory": bool, "stores": [{"database_url", "healthy"}]}
        """
        handles = list(self._handles.values())
        results = await asyncio.gather(*(handle.ping() for handle in handles))

        return {
            "directory": await self.registry.verify_db_connection(),
            "stores": [
                {"database_url": handle.masked_url, "healthy": healthy}
                for handle, healthy in zip(handles, results)
            ],
        }

    def connection_stats(self) -> dict[str, Any]:
        """已缓存句柄的数量与（脱敏后的）连接串"""
        return {
            "total_connections": len(self._handles),
            "connections": [handle.masked_url for handle in self._handles.values()],
        }

    async def _lookup_tenant(self, tenant_id: str) -> Optional[TenantModel]:
        """先查 Redis 缓存，未命中再查目录库并回填缓存；缓存不可用时直接查目录库"""
        redis_client = None
        if self.cache_tenants:
            try:
                redis_client = await self.registry.get_redis_client()
                tenant = await TenantRepository.get_tenant_cache(tenant_id, redis_client)
            except RedisError as e:
                logger.warning(f"租户缓存不可用，改查目录库: {tenant_id}, 错误: {e}")
                redis_client = None
                tenant = None
            if tenant:
                logger.debug(f"租户缓存命中: {tenant_id}")
                return tenant

        async with self.registry.db_session() as session:
            tenant = await TenantRepository.get_tenant_by_id(tenant_id, session)

        if tenant and redis_client is not None:
            try:
                await TenantRepository.update_tenant_cache(tenant, redis_client, self.settings.REDIS_TTL)
            except RedisError as e:
                logger.warning(f"回填租户缓存失败: {tenant_id}, 错误: {e}")
        return tenant

    @staticmethod
    def _ensure_available(tenant: Optional[TenantModel], lookup_key: str) -> str:
        if tenant is None or not tenant.is_active:
            logger.warning(f"租户不存在: {lookup_key}")
            raise TenantNotFoundException(lookup_key)
        if not tenant.is_available:
            logger.warning(f"租户不可用: {tenant.tenant_id}, 状态: {tenant.status}")
            raise TenantDisabledException(tenant.tenant_id)
        return tenant.database_url

    async def _get_or_create(self, database_url: str) -> TenantDatabase:
        handle = self._handles.get(database_url)
        if handle is not None:
            return handle

        async with self._lock:
            handle = self._handles.get(database_url)
            if handle is None:
                handle = TenantDatabase(database_url, self.settings)
                self._handles[database_url] = handle
                logger.info(f"创建店铺数据库连接: {handle.masked_url}")
        return handle
