"""
租户相关异常

包含租户解析、验证等相关的异常定义。
"""

from .base import BaseHTTPException


class TenantManagementException(BaseHTTPException):
    """租户管理异常基类"""
    code = 100000
    message = "TENANT_MANAGEMENT_ERROR"
    http_status_code = 500


class TenantNotFoundException(TenantManagementException):
    """租户不存在异常"""
    code = 1000002
    message = "TENANT_NOT_FOUND"
    http_status_code = 404

    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__(detail=f"租户 {tenant_id} 不存在")


class TenantValidationException(BaseHTTPException):
    """租户验证异常基类"""
    code = 1000005
    message = "TENANT_VALIDATION_ERROR"
    http_status_code = 403

    def __init__(self, tenant_id: str, reason: str):
        self.tenant_id = tenant_id
        super().__init__(detail=f"租户 {tenant_id} 验证失败: {reason}")


class TenantIdRequiredException(BaseHTTPException):
    """租户ID必填异常"""
    code = 1000006
    message = "TENANT_ID_REQUIRED"
    http_status_code = 400

    def __init__(self):
        super().__init__(detail="请求必须包含租户ID")


class TenantDisabledException(TenantValidationException):
    """租户已禁用异常"""
    code = 1000008
    message = "TENANT_DISABLED"

    def __init__(self, tenant_id: str):
        super().__init__(tenant_id=tenant_id, reason="租户已被禁用")
