from fastapi import Request

from infra import TenantDataRouter
from services import RecommendationService


def get_recommendation_service(request: Request) -> RecommendationService:
    """获取应用生命周期内创建的推荐服务"""
    return request.app.state.recommendation_service


def get_tenant_router(request: Request) -> TenantDataRouter:
    """获取应用生命周期内创建的租户数据路由器"""
    return request.app.state.tenant_router
