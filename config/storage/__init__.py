"""
存储配置模块

包含所有存储相关配置，包括租户目录 PostgreSQL 与 Redis。
"""

from typing import Optional

from pydantic import Field, NonNegativeInt, PositiveInt
from pydantic_settings import BaseSettings

from .redis_config import RedisConfig


class DatabaseConfig(BaseSettings):
    """
    租户目录数据库配置类

    目录库只保存店铺（租户）与其独立数据库连接串的映射，
    各店铺的行为数据存放在各自的数据库中。
    """
    # PostgreSQL 配置
    DB_HOST: str = Field(
        description="PostgreSQL 服务器主机地址，用于租户目录",
        default="localhost",
    )

    DB_PORT: PositiveInt = Field(
        description="PostgreSQL 服务器端口号",
        default=5432,
    )

    DB_NAME: str = Field(
        description="PostgreSQL 数据库名称",
        default="storefront",
    )

    POSTGRES_USER: str = Field(
        description="PostgreSQL 数据库用户名",
        default="postgres",
    )

    POSTGRES_PWD: Optional[str] = Field(
        description="PostgreSQL 数据库密码",
        default=None,
    )

    DIRECTORY_DATABASE_URL: Optional[str] = Field(
        description="租户目录库完整连接串，设置后覆盖 DB_* 拼接结果（如 sqlite+aiosqlite:///./directory.db）",
        default=None,
    )

    SQLALCHEMY_POOL_SIZE: NonNegativeInt = Field(
        description="PostgreSQL 数据库连接池大小",
        default=10,
    )
    SQLALCHEMY_MAX_OVERFLOW: NonNegativeInt = Field(
        description="PostgreSQL 数据库连接池最大溢出大小",
        default=20,
    )

    SQLALCHEMY_POOL_RECYCLE: NonNegativeInt = Field(
        description="PostgreSQL 数据库连接池回收时间",
        default=3600,
    )

    SQLALCHEMY_POOL_PRE_PING: bool = Field(
        description="PostgreSQL 数据库连接池预 ping",
        default=False,
    )

    SQLALCHEMY_COMMAND_TIMEOUT: NonNegativeInt = Field(
        description="PostgreSQL 数据库命令超时时间",
        default=30,
    )

    SQLALCHEMY_ECHO: bool = Field(
        description="PostgreSQL 数据库是否打印SQL语句",
        default=False,
    )

    @property
    def postgres_url(self) -> str:
        """构建PostgreSQL连接URL"""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PWD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def directory_database_url(self) -> str:
        """租户目录库连接URL"""
        return self.DIRECTORY_DATABASE_URL or self.postgres_url


class StorageConfig(
    DatabaseConfig,
    RedisConfig,
):
    """
    统一存储配置

    整合所有存储系统配置：
    - DatabaseConfig: 租户目录 PostgreSQL 配置
    - RedisConfig: Redis 缓存配置
    """
    pass
