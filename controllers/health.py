"""
健康检查端点

GET /health - 基础健康检查
GET /health/stores - 目录库与已连接店铺库的连通性
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import rec_config
from infra import TenantDataRouter
from utils import get_component_logger, to_isoformat
from .dependencies import get_tenant_router

logger = get_component_logger(__name__, "HealthCheck")

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    基础健康检查

    返回服务基本状态信息，确认服务正在运行
    """
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "service": rec_config.APP_NAME,
            "timestamp": to_isoformat()
        }
    )


@router.get("/health/stores")
async def stores_health_check(tenant_router: TenantDataRouter = Depends(get_tenant_router)):
    """对目录库与每个已缓存的店铺库执行 SELECT 1"""
    result = await tenant_router.health_check()
    healthy = result["directory"] and all(store["healthy"] for store in result["stores"])
    if not healthy:
        logger.warning(f"存储健康检查未通过: {result}")

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "degraded",
            **result,
            "connection_stats": tenant_router.connection_stats(),
            "timestamp": to_isoformat()
        }
    )
