"""
租户存储库测试

测试 TenantRepository 的目录库操作与 Redis 缓存读写
"""

from unittest.mock import AsyncMock, MagicMock

import msgpack
import pytest
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from models import TenantModel, TenantStatus
from repositories import TenantRepository


def make_tenant(**overrides) -> TenantModel:
    payload = {
        "tenant_id": "store-a",
        "tenant_name": "Glow Shop",
        "subdomain": "glow",
        "database_url": "sqlite+aiosqlite:///glow.db",
    }
    payload.update(overrides)
    return TenantModel(**payload)


@pytest.mark.asyncio
async def test_get_tenant_by_id_not_found():
    """测试租户不存在时返回 None"""
    mock_session = AsyncMock(spec=AsyncSession)
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_session.execute = AsyncMock(return_value=mock_result)

    result = await TenantRepository.get_tenant_by_id("non-existent-tenant", mock_session)

    assert result is None, "应该返回 None 当租户不存在时"
    mock_session.execute.assert_called_once()


@pytest.mark.asyncio
async def test_get_tenant_by_id_database_error_propagates():
    """测试目录库查询异常向上抛出"""
    mock_session = AsyncMock(spec=AsyncSession)
    mock_session.execute = AsyncMock(side_effect=RuntimeError("connection reset"))

    with pytest.raises(RuntimeError):
        await TenantRepository.get_tenant_by_id("store-a", mock_session)


@pytest.mark.asyncio
async def test_insert_and_lookup_by_subdomain(registry):
    """子域名按小写存储与查询"""
    async with registry.db_session() as session:
        await TenantRepository.insert_tenant(make_tenant(subdomain="Glow"), session)

    async with registry.db_session() as session:
        tenant = await TenantRepository.get_tenant_by_subdomain("GLOW", session)
        missing = await TenantRepository.get_tenant_by_id("store-z", session)

    assert tenant.tenant_id == "store-a"
    assert tenant.subdomain == "glow"
    assert tenant.status == TenantStatus.ACTIVE
    assert tenant.created_at is not None
    assert missing is None


@pytest.mark.asyncio
async def test_tenant_cache_round_trip():
    """缓存写入 msgpack，读取还原为业务模型"""
    redis_client = AsyncMock()
    tenant = make_tenant(status=TenantStatus.SUSPENDED)

    await TenantRepository.update_tenant_cache(tenant, redis_client, ttl=60)

    key, ttl, payload = redis_client.setex.call_args.args
    assert (key, ttl) == ("tenant:store-a", 60)

    redis_client.get = AsyncMock(return_value=payload)
    cached = await TenantRepository.get_tenant_cache("store-a", redis_client)

    assert cached == tenant
    assert msgpack.unpackb(payload, raw=False)["status"] == "SUSPENDED"


@pytest.mark.asyncio
async def test_tenant_cache_miss_returns_none():
    redis_client = AsyncMock()
    redis_client.get = AsyncMock(return_value=None)

    assert await TenantRepository.get_tenant_cache("store-a", redis_client) is None


@pytest.mark.asyncio
async def test_tenant_cache_redis_error_propagates():
    redis_client = AsyncMock()
    redis_client.get = AsyncMock(side_effect=RedisError("connection refused"))

    with pytest.raises(RedisError):
        await TenantRepository.get_tenant_cache("store-a", redis_client)

