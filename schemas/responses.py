"""
通用响应与结果模型

核心类:
- BaseResponse: 基础响应类，包含所有响应的标准字段
- BestEffortResult: 尽力而为操作的结果，对调用方永远是成功
- AnalyticsRow: 单个推荐类型的效果统计
"""

from typing import Any, Literal, Optional, Self

from pydantic import BaseModel, Field

from models import CustomerPreference, RecommendationResult, RecommendationType
from utils import get_current_timestamp_ms


class BaseResponse(BaseModel):
    """
    基础响应模型

    所有API响应的基础类，提供标准字段。
    域特定的响应模型应该继承此类。
    """

    code: int = Field(default=0, description="业务状态码，0表示成功")
    message: str = Field(default="success", description="响应消息")
    timestamp: int = Field(default_factory=get_current_timestamp_ms, description="响应时间戳")
    metadata: Optional[dict[str, Any]] = Field(None, description="响应元数据")


class BestEffortResult(BaseModel):
    """
    尽力而为操作结果

    追踪、反馈与偏好更新不会让调用方失败：存储异常被记录下来，
    以 degraded=True 和 error 描述的形式返回，success 始终为 True。
    """

    success: Literal[True] = True
    degraded: bool = Field(default=False, description="是否发生了被吞掉的存储异常")
    error: Optional[str] = Field(None, description="异常描述，仅用于诊断")

    @classmethod
    def ok(cls) -> Self:
        return cls()

    @classmethod
    def degrade(cls, error: BaseException | str) -> Self:
        return cls(degraded=True, error=str(error))


class AnalyticsRow(BaseModel):
    """单个推荐类型在统计窗口内的效果指标"""

    recommendation_type: RecommendationType
    total_shown: int
    total_clicked: int
    total_purchased: int
    click_through_rate: float = Field(description="点击率（百分比，两位小数）")
    conversion_rate: float = Field(description="转化率（百分比，两位小数）")


class TrackingResponse(BaseResponse):
    success: bool = True
    degraded: bool = False

    @classmethod
    def from_result(cls, result: BestEffortResult) -> Self:
        return cls(success=result.success, degraded=result.degraded)


class RecommendationListResponse(BaseResponse):
    recommendations: list[RecommendationResult] = Field(default_factory=list)


class AnalyticsResponse(BaseResponse):
    days: int
    analytics: list[AnalyticsRow] = Field(default_factory=list)


class PreferenceListResponse(BaseResponse):
    customer_id: int
    preferences: list[CustomerPreference] = Field(default_factory=list)
