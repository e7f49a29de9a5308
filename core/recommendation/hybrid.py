"""
混合推荐策略

并发运行四个基础策略，每个策略按名额比例分配请求数量（向上取整），
原始分数乘以策略权重后按商品合并：分数相加，推荐理由按首次出现顺序去重合并，
类型统一标记为 hybrid。合并后的分数不做二次归一化。

名额比例与权重来自 HYBRID_STRATEGY_PROFILES 配置。
"""

import asyncio
import math
from typing import Iterable, Optional

from config import AppConfig, StrategyProfile
from infra import TenantDatabase
from models import RecommendationResult, RecommendationType
from schemas import RecommendationRequest
from .base import BaseStrategy


def strategy_limit(limit: int, profile: StrategyProfile) -> int:
    """策略名额 = ceil(limit × limit_share)"""
    # 消除 10 * 0.3 = 3.0000000000000004 这类浮点误差后再取整
    return max(math.ceil(round(limit * profile.limit_share, 6)), 1)


def merge_weighted_results(
    weighted_results: Iterable[tuple[list[RecommendationResult], float]],
    limit: int
) -> list[RecommendationResult]:
    """
    按商品合并加权后的策略结果

    参数:
        weighted_results: (策略结果, 权重) 序列，顺序决定推荐理由的合并顺序
        limit: 最大返回条数

    返回:
        list[RecommendationResult]: 按合并分数降序（稳定排序），截断到 limit
    """
    merged: dict[int, RecommendationResult] = {}

    for results, weight in weighted_results:
        for result in results:
            weighted_score = result.score * weight
            existing = merged.get(result.product_id)
            if existing is None:
                merged[result.product_id] = RecommendationResult(
                    product_id=result.product_id,
                    score=weighted_score,
                    type=RecommendationType.HYBRID,
                    reasons=list(dict.fromkeys(result.reasons)),
                )
                continue

            existing.score += weighted_score
            for reason in result.reasons:
                if reason not in existing.reasons:
                    existing.reasons.append(reason)

    ranked = sorted(merged.values(), key=lambda item: item.score, reverse=True)
    return ranked[:limit]


class HybridStrategy(BaseStrategy):
    """
    混合推荐

    参数:
        settings: 应用配置
        strategies: 策略名称 -> 基础策略实例，名称与 HYBRID_STRATEGY_PROFILES 的键对应
    """

    recommendation_type = RecommendationType.HYBRID
    reason = ""

    def __init__(self, settings: AppConfig, strategies: dict[str, BaseStrategy]):
        super().__init__(settings)
        self.strategies = strategies

    @property
    def timeout_seconds(self) -> Optional[float]:
        # 子策略各自受超时约束
        return None

    @property
    def profiles(self) -> dict[str, StrategyProfile]:
        return self.settings.HYBRID_STRATEGY_PROFILES

    def strategy_limits(self, limit: int) -> dict[str, int]:
        """各子策略的请求名额"""
        return {
            name: strategy_limit(limit, profile)
            for name, profile in self.profiles.items()
            if name in self.strategies
        }

    async def generate(
        self,
        store: TenantDatabase,
        request: RecommendationRequest
    ) -> list[RecommendationResult]:
        limits = self.strategy_limits(request.limit)
        names = list(limits)

        results = await asyncio.gather(*(
            self.strategies[name].safe_generate(
                store,
                request.model_copy(update={"limit": limits[name]})
            )
            for name in names
        ))

        for name, strategy_results in zip(names, results):
            self.logger.debug(f"子策略 {name} 返回 {len(strategy_results)} 条结果")

        return merge_weighted_results(
            ((strategy_results, self.profiles[name].weight) for name, strategy_results in zip(names, results)),
            request.limit
        )
