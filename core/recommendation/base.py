"""
推荐策略基础类模块

该模块定义了所有推荐策略的抽象基类。每个策略独立查询店铺库，
返回不超过 limit 条、按分数降序排列的推荐结果。

核心功能:
- 策略生成抽象接口
- 超时控制与失败隔离（失败或超时统一返回空列表）
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from config import AppConfig
from infra import TenantDatabase
from models import RecommendationResult, RecommendationType
from schemas import RecommendationRequest
from utils import get_component_logger


class BaseStrategy(ABC):
    """
    推荐策略抽象基类

    属性:
        recommendation_type: 策略对应的推荐类型
        reason: 附加到每条结果上的推荐理由
        settings: 应用配置
        logger: 日志记录器

    子类必须实现:
        generate: 查询店铺库并生成推荐结果
    """

    recommendation_type: RecommendationType
    reason: str

    def __init__(self, settings: AppConfig):
        self.settings = settings
        self.logger = get_component_logger(__name__, self.__class__.__name__)

    @property
    def timeout_seconds(self) -> Optional[float]:
        """单次生成的超时时间，None 表示不限制"""
        return self.settings.STRATEGY_TIMEOUT_SECONDS

    @abstractmethod
    async def generate(
        self,
        store: TenantDatabase,
        request: RecommendationRequest
    ) -> list[RecommendationResult]:
        """
        生成推荐结果 (抽象方法)

        参数:
            store: 租户店铺库句柄
            request: 推荐请求

        返回:
            list[RecommendationResult]: 不超过 request.limit 条，按分数降序
        """
        pass

    async def safe_generate(
        self,
        store: TenantDatabase,
        request: RecommendationRequest
    ) -> list[RecommendationResult]:
        """
        带超时与异常隔离的生成

        任何异常或超时都记录日志并返回空列表，不向调用方传播。
        """
        try:
            return await asyncio.wait_for(
                self.generate(store, request),
                timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            self.logger.warning(
                f"推荐策略超时: {self.recommendation_type}, tenant={request.tenant_id}, "
                f"session={request.session_id}, 超时={self.timeout_seconds}s"
            )
            return []
        except Exception as e:
            self.logger.error(
                f"推荐策略执行失败: {self.recommendation_type}, tenant={request.tenant_id}, "
                f"session={request.session_id}, 错误: {e}",
                exc_info=True
            )
            return []

    def _result(self, product_id: int, score: float) -> RecommendationResult:
        return RecommendationResult(
            product_id=product_id,
            score=score,
            type=self.recommendation_type,
            reasons=[self.reason],
        )
