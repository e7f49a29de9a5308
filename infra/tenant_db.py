"""
店铺数据库句柄

每个店铺（租户）拥有独立的数据库，TenantDatabase 封装该库的引擎与会话工厂。
句柄由 TenantDataRouter 按连接串缓存复用。
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from config import AppConfig
from models import StoreBase
from utils import get_component_logger
from .db import build_async_engine, build_session_factory, mask_database_url

logger = get_component_logger(__name__, "TenantDatabase")


class TenantDatabase:
    """单个店铺数据库的访问句柄"""

    def __init__(self, database_url: str, settings: AppConfig):
        self.database_url = database_url
        self._engine = build_async_engine(database_url, settings)
        self._session_factory = build_session_factory(self._engine)

    @property
    def masked_url(self) -> str:
        return mask_database_url(self.database_url)

    @property
    def dialect_name(self) -> str:
        """数据库方言名称，如 postgresql、sqlite"""
        return self._engine.dialect.name

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        店铺数据库会话上下文管理器

        用法:
            async with store.session() as session:
                # 数据库操作
                pass
        """
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"店铺数据库操作失败，已回滚: {self.masked_url}, 错误: {e}")
            raise
        finally:
            await session.close()

    async def ping(self) -> bool:
        """执行 SELECT 1 检查连通性"""
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            logger.warning(f"店铺数据库连接测试失败: {self.masked_url}, 错误: {e}")
            return False

    async def create_schema(self) -> None:
        """创建店铺库中缺失的表"""
        async with self._engine.begin() as conn:
            await conn.run_sync(StoreBase.metadata.create_all)

    async def dispose(self) -> None:
        """释放连接池"""
        await self._engine.dispose()
        logger.debug(f"店铺数据库连接已释放: {self.masked_url}")
