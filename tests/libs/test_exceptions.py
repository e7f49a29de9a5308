"""
异常类单元测试

测试所有自定义异常类的:
- 错误码正确性
- HTTP状态码正确性
- 错误消息格式
"""

from libs.exceptions import (
    BaseHTTPException,
    RecommendationException,
    RecommendationValidationException,
    TenantDisabledException,
    TenantIdRequiredException,
    TenantManagementException,
    TenantNotFoundException,
    TenantValidationException,
)


class TestBaseExceptions:
    """测试基础异常类"""

    def test_base_http_exception_structure(self):
        exc = BaseHTTPException(detail="测试错误")

        assert exc.status_code == 500
        assert exc.data == {"code": 1000000, "message": "INTERNAL_ERROR", "detail": "测试错误"}


class TestTenantExceptions:
    """测试租户相关异常"""

    def test_tenant_not_found(self):
        exc = TenantNotFoundException("store-a")

        assert isinstance(exc, TenantManagementException)
        assert exc.code == 1000002
        assert exc.http_status_code == 404
        assert exc.status_code == 404
        assert exc.tenant_id == "store-a"
        assert "store-a" in exc.detail

    def test_tenant_disabled(self):
        exc = TenantDisabledException("store-a")

        assert isinstance(exc, TenantValidationException)
        assert exc.code == 1000008
        assert exc.http_status_code == 403
        assert exc.data["message"] == "TENANT_DISABLED"

    def test_tenant_id_required(self):
        exc = TenantIdRequiredException()

        assert exc.code == 1000006
        assert exc.http_status_code == 400


class TestRecommendationExceptions:
    """测试推荐服务异常"""

    def test_validation_exception(self):
        exc = RecommendationValidationException("days 必须大于等于 1")

        assert isinstance(exc, RecommendationException)
        assert exc.code == 1600001
        assert exc.http_status_code == 422
        assert exc.detail == "请求参数校验失败: days 必须大于等于 1"
