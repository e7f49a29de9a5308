"""
推荐服务相关异常

只有参数校验类错误会暴露给调用方；策略内部失败、埋点写入失败
均在服务内部记录日志并降级处理，不在此定义。
"""

from .base import BaseHTTPException


class RecommendationException(BaseHTTPException):
    """推荐服务异常基类"""
    code = 1600000
    message = "RECOMMENDATION_ERROR"
    http_status_code = 500


class RecommendationValidationException(RecommendationException):
    """推荐请求参数校验失败"""
    code = 1600001
    message = "RECOMMENDATION_VALIDATION_ERROR"
    http_status_code = 422

    def __init__(self, reason: str):
        super().__init__(detail=f"请求参数校验失败: {reason}")

