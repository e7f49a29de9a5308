"""
异常模块

提供推荐服务中所有自定义异常的统一导入接口。

异常按照业务域组织：
- base: 基础异常类
- tenant: 租户解析异常
- recommendation: 推荐请求异常

错误代码范围：
- 100000-1099999: 租户管理
- 1600000-1699999: 推荐服务

使用示例：
    from libs.exceptions import TenantNotFoundException
"""

# 基础异常
from .base import BaseHTTPException

# 租户管理异常
from .tenant import (
    TenantManagementException,
    TenantNotFoundException,
    TenantValidationException,
    TenantIdRequiredException,
    TenantDisabledException,
)

# 推荐服务异常
from .recommendation import (
    RecommendationException,
    RecommendationValidationException,
)

__all__ = [
    # 基础
    "BaseHTTPException",

    # 租户管理
    "TenantManagementException",
    "TenantNotFoundException",
    "TenantValidationException",
    "TenantIdRequiredException",
    "TenantDisabledException",

    # 推荐服务
    "RecommendationException",
    "RecommendationValidationException",
]
