"""
推荐数据模型

主要模型:
- RecommendationOrm: 持久化的推荐记录（用于反馈追踪与效果分析）
- RecommendationRecord: 推荐记录业务模型
- RecommendationResult: 策略输出的单条推荐结果
"""

from datetime import datetime
from typing import Optional, Self

from pydantic import BaseModel, Field
from sqlalchemy import JSON, Boolean, Column, DateTime, Enum, Index, Integer, Numeric, String

from utils import get_current_datetime
from .base import StoreBase
from .enums import RecommendationType, enum_values


class RecommendationOrm(StoreBase):
    """
    推荐记录表

    只有反馈记录器会修改 shown/clicked/purchased 及其时间戳，记录不会被删除。
    """

    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, index=True)
    session_id = Column(String(128), nullable=False, index=True)
    product_id = Column(Integer, nullable=False)
    recommendation_type = Column(
        Enum(RecommendationType, name="recommendation_type", native_enum=False, values_callable=enum_values),
        nullable=False
    )
    score = Column(Numeric(6, 4, asdecimal=False), nullable=False)
    reasons = Column(JSON, nullable=False, default=list)

    # 反馈状态
    shown = Column(Boolean, nullable=False, default=False)
    clicked = Column(Boolean, nullable=False, default=False)
    purchased = Column(Boolean, nullable=False, default=False)
    shown_at = Column(DateTime(timezone=True))
    clicked_at = Column(DateTime(timezone=True))
    purchased_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), nullable=False, default=get_current_datetime)

    __table_args__ = (
        Index('idx_recommendation_product', 'product_id'),
        Index('idx_recommendation_type_created', 'recommendation_type', 'created_at'),
    )


class RecommendationResult(BaseModel):
    """策略生成的推荐结果"""

    product_id: int = Field(description="商品ID")
    score: float = Field(description="推荐分数")
    type: RecommendationType = Field(description="推荐类型")
    reasons: list[str] = Field(default_factory=list, description="推荐理由，按出现顺序")


class RecommendationRecord(BaseModel):
    """推荐记录业务模型"""

    id: Optional[int] = Field(None, description="记录ID")
    customer_id: Optional[int] = Field(None, description="客户ID")
    session_id: str = Field(description="会话ID")
    product_id: int = Field(description="商品ID")
    recommendation_type: RecommendationType = Field(description="推荐类型")
    score: float = Field(description="推荐分数")
    reasons: list[str] = Field(default_factory=list, description="推荐理由")
    shown: bool = Field(default=False)
    clicked: bool = Field(default=False)
    purchased: bool = Field(default=False)
    shown_at: Optional[datetime] = Field(None)
    clicked_at: Optional[datetime] = Field(None)
    purchased_at: Optional[datetime] = Field(None)
    created_at: Optional[datetime] = Field(None, description="创建时间")

    @classmethod
    def to_model(cls, recommendation_orm: RecommendationOrm) -> Self:
        return cls(
            id=recommendation_orm.id,
            customer_id=recommendation_orm.customer_id,
            session_id=recommendation_orm.session_id,
            product_id=recommendation_orm.product_id,
            recommendation_type=recommendation_orm.recommendation_type,
            score=recommendation_orm.score,
            reasons=list(recommendation_orm.reasons or []),
            shown=recommendation_orm.shown,
            clicked=recommendation_orm.clicked,
            purchased=recommendation_orm.purchased,
            shown_at=recommendation_orm.shown_at,
            clicked_at=recommendation_orm.clicked_at,
            purchased_at=recommendation_orm.purchased_at,
            created_at=recommendation_orm.created_at,
        )

    @classmethod
    def from_result(
        cls,
        result: RecommendationResult,
        session_id: str,
        customer_id: Optional[int] = None
    ) -> Self:
        """由策略结果构造待持久化的推荐记录"""
        return cls(
            customer_id=customer_id,
            session_id=session_id,
            product_id=result.product_id,
            recommendation_type=result.type,
            score=round(result.score, 4),
            reasons=list(result.reasons),
        )

    def to_orm(self) -> RecommendationOrm:
        return RecommendationOrm(**self.model_dump(exclude_none=True))
