"""
基础设施模块

- InfraRegistry: 租户目录库与 Redis 客户端注册表
- TenantDatabase: 单个店铺数据库句柄
- TenantDataRouter: 租户到店铺数据库句柄的路由
"""

from .registry import InfraRegistry
from .tenant_db import TenantDatabase
from .tenant_router import TenantDataRouter

__all__ = [
    "InfraRegistry",
    "TenantDatabase",
    "TenantDataRouter",
]
