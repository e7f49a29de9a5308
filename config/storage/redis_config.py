from typing import Optional

from pydantic import Field, PositiveInt
from pydantic_settings import BaseSettings


class RedisConfig(BaseSettings):
    """
    Redis 配置
    """
    REDIS_HOST: str = Field(
        description="Redis 服务器主机地址",
        default="localhost",
    )

    REDIS_PORT: PositiveInt = Field(
        description="Redis 服务器端口号",
        default=6379,
    )

    REDIS_USERNAME: Optional[str] = Field(
        description="Redis 服务器用户名",
        default=None,
    )

    REDIS_PASSWORD: Optional[str] = Field(
        description="Redis 服务器密码",
        default=None,
    )

    REDIS_MAX_CONNECTIONS: PositiveInt = Field(
        description="Redis 最大连接数",
        default=10,
    )

    REDIS_SOCKET_TIMEOUT: float = Field(
        description="Redis 读写超时时间",
        default=5,
    )

    REDIS_CONNECT_TIMEOUT: float = Field(
        description="Redis 连接超时时间",
        default=5,
    )

    REDIS_TTL: PositiveInt = Field(
        description="Redis 缓存时间 (秒)",
        default=7200,
    )

    TENANT_CACHE_ENABLED: bool = Field(
        description="是否使用 Redis 缓存租户目录记录",
        default=False,
    )

    @property
    def redis_url(self) -> str:
        """构建Redis连接URL"""
        credentials = ""
        if self.REDIS_PASSWORD:
            credentials = f"{self.REDIS_USERNAME or ''}:{self.REDIS_PASSWORD}@"
        return f"redis://{credentials}{self.REDIS_HOST}:{self.REDIS_PORT}"
