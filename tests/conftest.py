"""
测试公共夹具

每个用例使用 tmp_path 下独立的 SQLite 文件：一个租户目录库，
每个店铺一个独立的店铺库。注册表与路由器在每个用例中重新创建。
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import pytest
import pytest_asyncio

from config import AppConfig
from infra import InfraRegistry, TenantDatabase, TenantDataRouter
from models import (
    BehaviorAction,
    BehaviorEventOrm,
    ProductCategoryMappingOrm,
    ProductViewOrm,
    RecommendationOrm,
    RecommendationType,
    TenantModel,
    TenantStatus,
)
from repositories import TenantRepository
from utils import get_current_datetime


@pytest.fixture
def settings(tmp_path) -> AppConfig:
    return AppConfig(
        _env_file=None,
        DIRECTORY_DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}",
        TENANT_CACHE_ENABLED=False,
        STRATEGY_TIMEOUT_SECONDS=5.0,
    )


@pytest_asyncio.fixture
async def registry(settings):
    registry = InfraRegistry(settings)
    await registry.create_directory_schema()
    yield registry
    await registry.shutdown_all()


@pytest_asyncio.fixture
async def tenant_router(registry):
    router = TenantDataRouter(registry)
    yield router
    await router.close_all()


@pytest.fixture
def add_tenant(registry, tmp_path):
    """在目录库中登记店铺，返回其业务模型"""

    async def _add(
        tenant_id: str,
        status: TenantStatus = TenantStatus.ACTIVE,
        is_active: bool = True,
        subdomain: Optional[str] = None
    ) -> TenantModel:
        tenant = TenantModel(
            tenant_id=tenant_id,
            tenant_name=f"店铺 {tenant_id}",
            subdomain=subdomain or tenant_id,
            database_url=f"sqlite+aiosqlite:///{tmp_path / f'{tenant_id}.db'}",
            status=status,
            is_active=is_active,
        )
        async with registry.db_session() as session:
            await TenantRepository.insert_tenant(tenant, session)
        return tenant

    return _add


@pytest.fixture
def make_store(add_tenant, tenant_router):
    """登记店铺、解析句柄并创建店铺库表"""

    async def _make(tenant_id: str) -> TenantDatabase:
        await add_tenant(tenant_id)
        store = await tenant_router.resolve(tenant_id)
        await store.create_schema()
        return store

    return _make


@pytest_asyncio.fixture
async def store(make_store) -> TenantDatabase:
    return await make_store("store-a")


class StoreSeeder:
    """直接向店铺库写入测试数据"""

    def __init__(self, store: TenantDatabase):
        self.store = store

    async def _add(self, *rows):
        async with self.store.session() as session:
            session.add_all(rows)

    async def behavior(
        self,
        action: BehaviorAction,
        product_id: Optional[int] = None,
        customer_id: Optional[int] = None,
        session_id: str = "sess-seed",
        timestamp: Optional[datetime] = None
    ):
        await self._add(BehaviorEventOrm(
            customer_id=customer_id,
            session_id=session_id,
            action=action,
            product_id=product_id,
            device_type="desktop",
            source="direct",
            timestamp=timestamp or get_current_datetime(),
        ))

    async def purchases(self, customer_id: int, *product_ids: int):
        for product_id in product_ids:
            await self.behavior(BehaviorAction.PURCHASE, product_id, customer_id, f"sess-{customer_id}")

    async def view(
        self,
        product_id: int,
        session_id: str = "sess-1",
        customer_id: Optional[int] = None,
        timestamp: Optional[datetime] = None,
        view_duration: int = 0
    ):
        await self._add(ProductViewOrm(
            customer_id=customer_id,
            session_id=session_id,
            product_id=product_id,
            view_duration=view_duration,
            timestamp=timestamp or get_current_datetime(),
        ))

    async def mappings(self, *pairs: tuple[int, int]):
        await self._add(*(
            ProductCategoryMappingOrm(product_id=product_id, category_id=category_id)
            for product_id, category_id in pairs
        ))

    async def recommendation(
        self,
        product_id: int,
        recommendation_type: RecommendationType = RecommendationType.TRENDING,
        session_id: str = "sess-1",
        customer_id: Optional[int] = None,
        shown: bool = False,
        clicked: bool = False,
        purchased: bool = False,
        created_at: Optional[datetime] = None
    ):
        await self._add(RecommendationOrm(
            customer_id=customer_id,
            session_id=session_id,
            product_id=product_id,
            recommendation_type=recommendation_type,
            score=0.5,
            reasons=["seed"],
            shown=shown,
            clicked=clicked,
            purchased=purchased,
            created_at=created_at or get_current_datetime(),
        ))


@pytest.fixture
def seeder(store) -> StoreSeeder:
    return StoreSeeder(store)


class BrokenStore:
    """会话无法打开的店铺库句柄，用于验证尽力而为的降级路径"""

    masked_url = "sqlite+aiosqlite:///broken.db"
    dialect_name = "sqlite"

    @asynccontextmanager
    async def session(self):
        raise RuntimeError("数据库不可用")
        yield


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()
