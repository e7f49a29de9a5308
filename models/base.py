"""
ORM 声明基类

目录库与店铺库使用两套独立的元数据：
- Base: 租户目录库（店铺与其数据库连接串）
- StoreBase: 每个店铺独立数据库中的行为、推荐与类目表
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """租户目录库声明基类"""
    pass


class StoreBase(DeclarativeBase):
    """店铺数据库声明基类"""
    pass
