"""
数据库引擎构建

目录库与各店铺库共用同一套引擎参数。PostgreSQL（asyncpg）连接串会带上
连接池与命令超时配置，SQLite（aiosqlite）连接串只使用默认连接池。
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine
)

from config import AppConfig


def build_async_engine(database_url: str, settings: AppConfig) -> AsyncEngine:
    """
    根据连接串创建异步引擎

    参数:
        database_url: SQLAlchemy 连接串
        settings: 应用配置

    返回:
        AsyncEngine: SQLAlchemy异步引擎
    """
    url = make_url(database_url)
    engine_kwargs = {"echo": settings.SQLALCHEMY_ECHO}

    if url.get_backend_name() == "postgresql":
        # 连接池配置
        engine_kwargs.update(
            pool_size=settings.SQLALCHEMY_POOL_SIZE,
            max_overflow=settings.SQLALCHEMY_MAX_OVERFLOW,
            pool_pre_ping=settings.SQLALCHEMY_POOL_PRE_PING,
            pool_recycle=settings.SQLALCHEMY_POOL_RECYCLE,
        )
        if url.get_driver_name() == "asyncpg":
            engine_kwargs["connect_args"] = {
                "command_timeout": settings.SQLALCHEMY_COMMAND_TIMEOUT,
                "server_settings": {
                    "application_name": settings.APP_NAME,
                }
            }

    return create_async_engine(url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """创建会话工厂"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=True,
        autocommit=False
    )


def mask_database_url(database_url: str) -> str:
    """隐藏连接串中的密码，用于日志与健康检查输出"""
    return make_url(database_url).render_as_string(hide_password=True)
