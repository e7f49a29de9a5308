"""
推荐引擎请求模型

字段在 Python 中使用 snake_case，线上传输接受 camelCase 别名
（tenantId、sessionId、excludeProductIds 等），两种写法均可。
缺失必填字段由 pydantic 在任何 I/O 之前拒绝。
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from config import rec_config
from models import BehaviorAction, FeedbackAction, RecommendationType


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecommendationRequest(_CamelModel):
    tenant_id: str = Field(min_length=1, description="租户ID")
    session_id: str = Field(min_length=1, description="会话ID")
    customer_id: Optional[int] = Field(None, description="客户ID，匿名访客为空")
    limit: int = Field(
        default=rec_config.DEFAULT_LIMIT,
        gt=0,
        le=rec_config.MAX_LIMIT,
        description="最大返回条数"
    )
    exclude_product_ids: list[int] = Field(default_factory=list, description="排除的商品ID")
    type: RecommendationType = Field(default=RecommendationType.HYBRID, description="推荐策略")
    persist: bool = Field(default=False, description="是否持久化结果以便追踪反馈")

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value):
        # 未指定策略时使用混合推荐
        return value or RecommendationType.HYBRID


class TrackBehaviorRequest(_CamelModel):
    tenant_id: str = Field(min_length=1, description="租户ID")
    session_id: str = Field(min_length=1, description="会话ID")
    action: BehaviorAction = Field(description="行为类型")
    customer_id: Optional[int] = Field(None, description="客户ID")
    product_id: Optional[int] = Field(None, description="商品ID")
    search_query: Optional[str] = Field(None, description="搜索词")
    category: Optional[str] = Field(None, description="类目")
    time_spent: Optional[int] = Field(None, ge=0, description="停留时长（秒）")
    metadata: Optional[dict[str, Any]] = Field(None, description="附加上下文")
    device_type: str = Field(default="desktop", description="设备类型")
    source: str = Field(default="direct", description="流量来源")


class TrackProductViewRequest(_CamelModel):
    tenant_id: str = Field(min_length=1, description="租户ID")
    session_id: str = Field(min_length=1, description="会话ID")
    product_id: int = Field(description="商品ID")
    customer_id: Optional[int] = Field(None, description="客户ID")
    view_duration: int = Field(default=0, ge=0, description="浏览时长（秒）")
    referrer: Optional[str] = Field(None, description="来源页面")


class RecommendationFeedbackRequest(_CamelModel):
    tenant_id: str = Field(min_length=1, description="租户ID")
    session_id: str = Field(min_length=1, description="会话ID")
    product_id: int = Field(description="商品ID")
    action: FeedbackAction = Field(description="反馈动作")
    customer_id: Optional[int] = Field(None, description="客户ID")
