"""
客户行为数据模型

行为日志只追加、不修改、不删除。商品与客户ID均为弱引用（不建外键），
商品或客户被删除后遗留的历史记录照常保留。

主要模型:
- BehaviorEventOrm / BehaviorEvent: 客户行为事件
- ProductViewOrm / ProductView: 商品浏览（附带停留时长）
"""

from datetime import datetime
from typing import Any, Optional, Self

from pydantic import BaseModel, Field
from sqlalchemy import JSON, Column, DateTime, Enum, Index, Integer, String, Text

from utils import get_current_datetime
from .base import StoreBase
from .enums import BehaviorAction, enum_values


class BehaviorEventOrm(StoreBase):
    """客户行为事件表"""

    __tablename__ = "customer_behavior"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, index=True, comment="客户ID，匿名会话为空")
    session_id = Column(String(128), nullable=False, index=True)
    action = Column(
        Enum(BehaviorAction, name="behavior_action", native_enum=False, values_callable=enum_values),
        nullable=False
    )
    product_id = Column(Integer, index=True)
    search_query = Column(Text)
    category = Column(String(128))
    time_spent = Column(Integer, comment="停留时长（秒）")
    event_metadata = Column("metadata", JSON)
    device_type = Column(String(32), comment="mobile, desktop, tablet")
    source = Column(String(32), comment="direct, social, search, referral")
    timestamp = Column(DateTime(timezone=True), nullable=False, default=get_current_datetime)

    __table_args__ = (
        Index('idx_behavior_action_timestamp', 'action', 'timestamp'),
    )


class BehaviorEvent(BaseModel):
    """客户行为事件业务模型"""

    id: Optional[int] = Field(None, description="事件ID")
    customer_id: Optional[int] = Field(None, description="客户ID")
    session_id: str = Field(description="会话ID")
    action: BehaviorAction = Field(description="行为类型")
    product_id: Optional[int] = Field(None, description="商品ID")
    search_query: Optional[str] = Field(None, description="搜索词")
    category: Optional[str] = Field(None, description="类目")
    time_spent: Optional[int] = Field(None, description="停留时长（秒）")
    metadata: Optional[dict[str, Any]] = Field(None, description="附加上下文")
    device_type: str = Field(default="desktop", description="设备类型")
    source: str = Field(default="direct", description="流量来源")
    timestamp: datetime = Field(default_factory=get_current_datetime, description="发生时间")

    @classmethod
    def to_model(cls, event_orm: BehaviorEventOrm) -> Self:
        return cls(
            id=event_orm.id,
            customer_id=event_orm.customer_id,
            session_id=event_orm.session_id,
            action=event_orm.action,
            product_id=event_orm.product_id,
            search_query=event_orm.search_query,
            category=event_orm.category,
            time_spent=event_orm.time_spent,
            metadata=event_orm.event_metadata,
            device_type=event_orm.device_type,
            source=event_orm.source,
            timestamp=event_orm.timestamp,
        )

    def to_orm(self) -> BehaviorEventOrm:
        return BehaviorEventOrm(
            id=self.id,
            customer_id=self.customer_id,
            session_id=self.session_id,
            action=self.action,
            product_id=self.product_id,
            search_query=self.search_query,
            category=self.category,
            time_spent=self.time_spent,
            event_metadata=self.metadata,
            device_type=self.device_type,
            source=self.source,
            timestamp=self.timestamp,
        )


class ProductViewOrm(StoreBase):
    """商品浏览记录表"""

    __tablename__ = "product_views"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, index=True)
    session_id = Column(String(128), nullable=False, index=True)
    product_id = Column(Integer, nullable=False, index=True)
    view_duration = Column(Integer, nullable=False, default=0, comment="浏览时长（秒）")
    referrer = Column(String(1024))
    timestamp = Column(DateTime(timezone=True), nullable=False, default=get_current_datetime)


class ProductView(BaseModel):
    """商品浏览业务模型"""

    id: Optional[int] = Field(None, description="记录ID")
    customer_id: Optional[int] = Field(None, description="客户ID")
    session_id: str = Field(description="会话ID")
    product_id: int = Field(description="商品ID")
    view_duration: int = Field(default=0, ge=0, description="浏览时长（秒）")
    referrer: Optional[str] = Field(None, description="来源页面")
    timestamp: datetime = Field(default_factory=get_current_datetime, description="浏览时间")

    @classmethod
    def to_model(cls, view_orm: ProductViewOrm) -> Self:
        return cls(
            id=view_orm.id,
            customer_id=view_orm.customer_id,
            session_id=view_orm.session_id,
            product_id=view_orm.product_id,
            view_duration=view_orm.view_duration,
            referrer=view_orm.referrer,
            timestamp=view_orm.timestamp,
        )

    def to_orm(self) -> ProductViewOrm:
        return ProductViewOrm(
            id=self.id,
            customer_id=self.customer_id,
            session_id=self.session_id,
            product_id=self.product_id,
            view_duration=self.view_duration,
            referrer=self.referrer,
            timestamp=self.timestamp,
        )
