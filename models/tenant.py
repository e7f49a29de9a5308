"""
租户目录数据模型

店铺即租户。目录库只记录店铺的子域名与其独立数据库的连接串，
推荐引擎通过 TenantDataRouter 将租户解析到对应的数据库句柄。

主要模型:
- TenantOrm: 租户目录数据库模型
- TenantModel: 租户业务模型
"""

from datetime import datetime
from typing import Optional, Self

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import Boolean, Column, DateTime, Enum, Index, String, func

from utils import get_current_datetime
from .base import Base
from .enums import TenantStatus, enum_values


class TenantOrm(Base):
    """
    租户数据库模型

    对应目录库中的 stores 表
    """
    __tablename__ = "stores"

    # 基本信息
    tenant_id = Column(String(64), primary_key=True)
    tenant_name = Column(String(255), nullable=False)
    subdomain = Column(String(128), nullable=False, unique=True)
    database_url = Column(String(1024), nullable=False, comment="店铺独立数据库连接串")
    status = Column(
        Enum(TenantStatus, name="tenant_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=TenantStatus.ACTIVE
    )
    is_active = Column(Boolean, nullable=False, default=True)

    # 审计字段
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=get_current_datetime,
        server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=get_current_datetime,
        server_default=func.now()
    )

    __table_args__ = (
        Index('idx_store_status', 'status'),
        Index('idx_store_is_active', 'is_active'),
    )


class TenantModel(BaseModel):
    """
    租户业务模型

    也是 Redis 缓存中保存的结构（msgpack 序列化 ``model_dump(mode='json')``）。
    """

    tenant_id: str = Field(description="租户标识符")
    tenant_name: str = Field(description="店铺名称")
    subdomain: str = Field(description="店铺子域名")
    database_url: str = Field(description="店铺独立数据库连接串")
    status: TenantStatus = Field(default=TenantStatus.ACTIVE, description="租户状态")
    is_active: bool = Field(default=True, description="激活状态")
    created_at: Optional[datetime] = Field(None, description="创建时间")
    updated_at: Optional[datetime] = Field(None, description="最后更新时间")

    @field_validator("subdomain")
    @classmethod
    def _normalize_subdomain(cls, value: str) -> str:
        # 子域名不区分大小写
        return value.strip().lower()

    @property
    def is_available(self) -> bool:
        """租户是否可以处理请求"""
        return self.is_active and self.status == TenantStatus.ACTIVE

    @classmethod
    def to_model(cls, tenant_orm: TenantOrm) -> Self:
        return cls(
            tenant_id=tenant_orm.tenant_id,
            tenant_name=tenant_orm.tenant_name,
            subdomain=tenant_orm.subdomain,
            database_url=tenant_orm.database_url,
            status=tenant_orm.status,
            is_active=tenant_orm.is_active,
            created_at=tenant_orm.created_at,
            updated_at=tenant_orm.updated_at,
        )

    def to_orm(self) -> TenantOrm:
        # 未赋值的审计字段交给列默认值
        return TenantOrm(**self.model_dump(exclude_none=True))
