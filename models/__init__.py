"""
数据模型模块

每个领域文件同时包含 SQLAlchemy ORM 类及其 Pydantic 业务模型。
"""

from .base import Base, StoreBase
from .enums import (
    BehaviorAction,
    FeedbackAction,
    PreferenceType,
    RecommendationType,
    TenantStatus,
)
from .tenant import TenantModel, TenantOrm
from .behavior import BehaviorEvent, BehaviorEventOrm, ProductView, ProductViewOrm
from .recommendation import RecommendationOrm, RecommendationRecord, RecommendationResult
from .preference import CustomerPreference, CustomerPreferenceOrm
from .catalog import ProductCategoryMappingOrm, ProductCategoryOrm

__all__ = [
    "Base",
    "StoreBase",
    "BehaviorAction",
    "FeedbackAction",
    "PreferenceType",
    "RecommendationType",
    "TenantStatus",
    "TenantModel",
    "TenantOrm",
    "BehaviorEvent",
    "BehaviorEventOrm",
    "ProductView",
    "ProductViewOrm",
    "RecommendationOrm",
    "RecommendationRecord",
    "RecommendationResult",
    "CustomerPreference",
    "CustomerPreferenceOrm",
    "ProductCategoryMappingOrm",
    "ProductCategoryOrm",
]
