from collections.abc import Mapping

from starlette.exceptions import HTTPException


class BaseHTTPException(HTTPException):
    """
    HTTP异常基类

    继承Starlette的HTTPException，提供标准化的HTTP错误响应格式。
    所有需要返回HTTP错误响应的异常都应该继承此类。

    属性:
        code: 业务错误代码，子类应该重写此属性
        message: 错误描述，子类应该重写此属性
        data: 结构化的错误响应数据

    用法示例:
        class StoreNotFound(BaseHTTPException):
            code = 10011
            message = "STORE_NOT_FOUND"
            http_status_code = 404

            def __init__(self, store_id: str):
                super().__init__(detail=f"店铺 {store_id} 不存在")
    """

    code: int = 1000000
    message: str = "INTERNAL_ERROR"
    http_status_code: int = 500
    data: dict | None = None

    def __init__(self, detail: str | None = None, headers: Mapping[str, str] | None = None):
        super().__init__(self.http_status_code, detail, headers)

        self.data = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail
        }
