"""
基础设施客户端注册表

集中管理租户目录数据库与 Redis 缓存的客户端实例，
提供统一的初始化、获取与关闭流程。注册表由应用生命周期显式创建并注入，
测试中每个用例可以使用独立的注册表。
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from redis.asyncio import ConnectionPool, Redis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from config import AppConfig, rec_config
from models import Base
from utils import get_component_logger
from .db import build_async_engine, build_session_factory, mask_database_url

logger = get_component_logger(__name__)


class InfraRegistry:
    """
    基础设施客户端注册表

    负责懒加载目录库引擎与Redis连接池，并提供统一的生命周期管理。
    """

    def __init__(self, settings: Optional[AppConfig] = None):
        self.settings = settings or rec_config

        # 租户目录库
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._db_lock = asyncio.Lock()

        # Redis
        self._redis_pool: Optional[ConnectionPool] = None
        self._redis_lock = asyncio.Lock()

    # --- Database helpers -------------------------------------------------
    async def get_db_engine(self) -> AsyncEngine:
        """获取或初始化目录库引擎。"""
        if self._engine is None:
            async with self._db_lock:
                if self._engine is None:
                    database_url = self.settings.directory_database_url
                    logger.info(f"初始化租户目录库连接: {mask_database_url(database_url)}")
                    self._engine = build_async_engine(database_url, self.settings)
                    self._session_factory = build_session_factory(self._engine)
                    logger.info("租户目录库引擎初始化完成")
        return self._engine

    async def get_db_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """获取或初始化Session工厂。"""
        if self._session_factory is None:
            await self.get_db_engine()
        return self._session_factory

    async def create_directory_schema(self) -> None:
        """在目录库中创建缺失的表（本地开发与测试使用）。"""
        engine = await self.get_db_engine()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close_db(self) -> None:
        """关闭目录库资源。"""
        async with self._db_lock:
            if self._engine:
                await self._engine.dispose()
                self._engine = None
                self._session_factory = None
                logger.info("租户目录库连接已关闭")

    async def verify_db_connection(self) -> bool:
        """测试目录库连通性。"""
        try:
            engine = await self.get_db_engine()
            async with engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                row = result.fetchone()
            return row is not None and row[0] == 1
        except Exception as exc:
            logger.error(f"租户目录库连接测试失败: {exc}")
            return False

    # --- Redis helpers ----------------------------------------------------
    async def get_redis_pool(self) -> ConnectionPool:
        """获取或初始化Redis连接池。"""
        if self._redis_pool is None:
            async with self._redis_lock:
                if self._redis_pool is None:
                    logger.info(f"初始化Redis连接: {self.settings.REDIS_HOST}")
                    self._redis_pool = ConnectionPool.from_url(
                        self.settings.redis_url,
                        decode_responses=False,
                        max_connections=self.settings.REDIS_MAX_CONNECTIONS,
                        socket_timeout=self.settings.REDIS_SOCKET_TIMEOUT,
                        socket_connect_timeout=self.settings.REDIS_CONNECT_TIMEOUT,
                    )
                    logger.info("Redis连接池初始化完成")
        return self._redis_pool

    async def get_redis_client(self) -> Redis:
        """基于连接池返回Redis客户端实例。"""
        pool = await self.get_redis_pool()
        return Redis(connection_pool=pool)

    async def close_redis(self) -> None:
        """关闭Redis连接池。"""
        async with self._redis_lock:
            if self._redis_pool:
                await self._redis_pool.disconnect()
                self._redis_pool = None
                logger.info("Redis连接池关闭成功")

    async def verify_redis_connection(self) -> bool:
        """测试Redis连通性。"""
        try:
            client = await self.get_redis_client()
            pong = await client.ping()
            if pong:
                logger.info("Redis连接测试成功")
            return bool(pong)
        except Exception as exc:
            logger.error(f"Redis连接测试失败: {exc}")
            return False

    # --- Orchestration ----------------------------------------------------
    async def initialize_all(self) -> None:
        """
        初始化所有已启用的基础设施客户端。

        Redis 只在启用租户缓存时检查；连通性失败仅记录日志，
        请求路径上的错误由各调用方处理。
        """
        if await self.verify_db_connection():
            logger.info("租户目录库连接测试成功")
        if self.settings.TENANT_CACHE_ENABLED:
            await self.verify_redis_connection()

    async def shutdown_all(self) -> None:
        """关闭所有注册的客户端。"""
        await self.close_db()
        await self.close_redis()

    # --- Utility context managers ----------------------------------------
    @asynccontextmanager
    async def db_session(self) -> AsyncGenerator[AsyncSession, None]:
        """提供目录库会话上下文管理。"""
        session_factory = await self.get_db_session_factory()
        session = session_factory()
        try:
            yield session
            await session.commit()
        except Exception as exc:
            await session.rollback()
            logger.error(f"目录库操作失败，本次操作已取消: {exc}")
            raise
        finally:
            await session.close()
