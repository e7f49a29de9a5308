"""
推荐引擎端点

POST /recommendations                     - 生成推荐
POST /recommendations/track-behavior      - 记录客户行为
POST /recommendations/track-product-view  - 记录商品浏览
POST /recommendations/feedback            - 记录推荐反馈
GET  /recommendations/analytics/{tenant_id}             - 推荐效果分析
PUT  /recommendations/preferences/{tenant_id}/{customer_id} - 重新计算客户偏好
GET  /recommendations/preferences/{tenant_id}/{customer_id} - 查询客户偏好

租户解析失败由 BaseHTTPException 处理器转换为 404/403 响应；
请求体缺少必填字段时 FastAPI 返回 422。
"""

from typing import Optional

from fastapi import APIRouter, Depends

from schemas import (
    AnalyticsResponse,
    PreferenceListResponse,
    RecommendationFeedbackRequest,
    RecommendationListResponse,
    RecommendationRequest,
    TrackBehaviorRequest,
    TrackingResponse,
    TrackProductViewRequest
)
from services import RecommendationService
from utils import get_component_logger
from .dependencies import get_recommendation_service

logger = get_component_logger(__name__, "RecommendationEndpoints")

router = APIRouter()


@router.post("", response_model=RecommendationListResponse)
async def generate_recommendations(
    request: RecommendationRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """生成推荐，结果为空时返回空列表而非错误"""
    results = await service.generate_recommendations(request)
    return RecommendationListResponse(recommendations=results)


@router.post("/track-behavior", response_model=TrackingResponse)
async def track_behavior(
    request: TrackBehaviorRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    result = await service.track_behavior(request)
    return TrackingResponse.from_result(result)


@router.post("/track-product-view", response_model=TrackingResponse)
async def track_product_view(
    request: TrackProductViewRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    result = await service.track_product_view(request)
    return TrackingResponse.from_result(result)


@router.post("/feedback", response_model=TrackingResponse)
async def track_recommendation_feedback(
    request: RecommendationFeedbackRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    result = await service.track_recommendation_feedback(request)
    return TrackingResponse.from_result(result)


@router.get("/analytics/{tenant_id}", response_model=AnalyticsResponse)
async def get_recommendation_analytics(
    tenant_id: str,
    days: Optional[int] = None,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """按推荐类型统计点击率与转化率，days 默认 30"""
    window = service.settings.ANALYTICS_DEFAULT_DAYS if days is None else days
    rows = await service.get_recommendation_analytics(tenant_id, window)
    return AnalyticsResponse(days=window, analytics=rows)


@router.put("/preferences/{tenant_id}/{customer_id}", response_model=TrackingResponse)
async def update_customer_preferences(
    tenant_id: str,
    customer_id: int,
    service: RecommendationService = Depends(get_recommendation_service)
):
    logger.info(f"重新计算客户偏好: tenant={tenant_id}, customer={customer_id}")
    result = await service.update_customer_preferences(tenant_id, customer_id)
    return TrackingResponse.from_result(result)


@router.get("/preferences/{tenant_id}/{customer_id}", response_model=PreferenceListResponse)
async def get_customer_preferences(
    tenant_id: str,
    customer_id: int,
    service: RecommendationService = Depends(get_recommendation_service)
):
    preferences = await service.get_customer_preferences(tenant_id, customer_id)
    return PreferenceListResponse(customer_id=customer_id, preferences=preferences)
