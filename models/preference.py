"""
客户偏好数据模型

偏好以 (customer_id, preference_type, preference_value) 为唯一键，
重新计算时覆盖强度，不会追加重复行。
"""

from datetime import datetime
from typing import Optional, Self

from pydantic import BaseModel, Field
from sqlalchemy import Column, DateTime, Integer, Numeric, String, UniqueConstraint

from utils import get_current_datetime
from .base import StoreBase


class CustomerPreferenceOrm(StoreBase):
    """客户偏好表"""

    __tablename__ = "customer_preferences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, nullable=False, index=True)
    preference_type = Column(String(64), nullable=False, comment="category, brand, price_range")
    preference_value = Column(String(255), nullable=False)
    strength = Column(Numeric(5, 4, asdecimal=False), nullable=False, default=0.5)
    created_at = Column(DateTime(timezone=True), nullable=False, default=get_current_datetime)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=get_current_datetime,
        onupdate=get_current_datetime
    )

    __table_args__ = (
        UniqueConstraint(
            'customer_id', 'preference_type', 'preference_value',
            name='uq_customer_preference'
        ),
    )


class CustomerPreference(BaseModel):
    """客户偏好业务模型"""

    customer_id: int = Field(description="客户ID")
    preference_type: str = Field(description="偏好维度")
    preference_value: str = Field(description="偏好取值")
    strength: float = Field(ge=0, le=1, description="偏好强度")
    created_at: Optional[datetime] = Field(None)
    updated_at: Optional[datetime] = Field(None)

    @classmethod
    def to_model(cls, preference_orm: CustomerPreferenceOrm) -> Self:
        return cls(
            customer_id=preference_orm.customer_id,
            preference_type=preference_orm.preference_type,
            preference_value=preference_orm.preference_value,
            strength=preference_orm.strength,
            created_at=preference_orm.created_at,
            updated_at=preference_orm.updated_at,
        )
