"""
FastAPI主应用入口

该模块是整个API服务的入口点，负责创建FastAPI应用实例、
注册路由器、配置中间件和异常处理。

核心功能:
- FastAPI应用初始化与生命周期管理（注册表、租户路由器、推荐服务）
- 路由器注册和管理
- 全局异常处理
"""

import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import rec_config
from controllers import app_router, __version__
from infra import InfraRegistry, TenantDataRouter
from libs.exceptions import BaseHTTPException
from services import RecommendationService
from utils import get_component_logger, configure_logging, to_isoformat

# 配置日志
logger = get_component_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时执行
    configure_logging()
    registry = InfraRegistry(rec_config)
    await registry.initialize_all()

    tenant_router = TenantDataRouter(registry)
    app.state.tenant_router = tenant_router
    app.state.recommendation_service = RecommendationService(tenant_router, rec_config)

    yield
    # 关闭时执行
    await tenant_router.close_all()
    await registry.shutdown_all()


# 创建FastAPI应用
app = FastAPI(
    title="店铺推荐引擎API",
    description="多租户电商店铺的商品推荐、行为追踪与效果分析",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# 配置CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 全局异常处理
@app.exception_handler(BaseHTTPException)
async def api_exception_handler(_, exc: BaseHTTPException):
    """处理自定义API异常"""
    return JSONResponse(
        status_code=exc.http_status_code,
        content={
            **exc.data,
            "timestamp": to_isoformat()
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """处理未捕获的异常"""
    logger.error(f"未捕获异常: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "code": 1000000,
            "message": "INTERNAL_ERROR",
            "detail": "服务器内部错误",
            "timestamp": to_isoformat(),
            "path": str(request.url)
        }
    )


# 注册路由器
app.include_router(app_router, prefix="/v1")


# 根路径健康检查
@app.get("/")
async def root():
    """根路径健康检查"""
    return {
        "service": rec_config.APP_NAME,
        "status": "运行中",
        "version": __version__,
        "docs": "/docs"
    }


def main():
    """Main entry point for the application."""
    uvicorn.run(
        "main:app",
        host=rec_config.APP_HOST,
        port=rec_config.APP_PORT,
        reload=rec_config.DEBUG,
        log_level=rec_config.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
