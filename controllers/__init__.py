"""
API Package - Storefront Recommendation Service

组织结构:
- recommendations.py: 推荐引擎端点
- health.py: 健康检查
- dependencies.py: 依赖注入
"""

from fastapi import APIRouter

from .health import router as health_router
from .recommendations import router as recommendations_router


app_router = APIRouter()

# 注册所有路由器，包含统一的prefix和tags配置
app_router.include_router(recommendations_router, prefix="/recommendations", tags=["recommendations"])
app_router.include_router(health_router, tags=["health"])


__version__ = "0.1.0"
