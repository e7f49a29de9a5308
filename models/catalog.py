"""
商品类目数据模型

类目及商品-类目映射由商品管理模块维护，推荐引擎只读。
"""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, UniqueConstraint

from utils import get_current_datetime
from .base import StoreBase


class ProductCategoryOrm(StoreBase):
    """商品类目表"""

    __tablename__ = "product_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    parent_id = Column(Integer, comment="上级类目ID")
    created_at = Column(DateTime(timezone=True), nullable=False, default=get_current_datetime)


class ProductCategoryMappingOrm(StoreBase):
    """商品与类目的多对多映射"""

    __tablename__ = "product_category_mappings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, nullable=False)
    category_id = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint('product_id', 'category_id', name='uq_product_category'),
        Index('idx_mapping_category', 'category_id'),
    )
