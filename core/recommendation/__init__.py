"""
推荐策略模块

核心功能:
- 四个基础推荐策略
- 混合推荐合并
- 策略集合创建
"""

from config import AppConfig
from models import RecommendationType
from .base import BaseStrategy
from .collaborative import CollaborativeStrategy
from .content_based import ContentBasedStrategy
from .hybrid import HybridStrategy, merge_weighted_results, strategy_limit
from .recently_viewed import RecentlyViewedStrategy, recency_score
from .trending import TrendingStrategy


# 推荐类型 -> 基础策略类 映射
STRATEGY_MAPPING: dict[RecommendationType, type[BaseStrategy]] = {
    RecommendationType.COLLABORATIVE: CollaborativeStrategy,
    RecommendationType.CONTENT_BASED: ContentBasedStrategy,
    RecommendationType.TRENDING: TrendingStrategy,
    RecommendationType.RECENTLY_VIEWED: RecentlyViewedStrategy,
}


def create_strategies(settings: AppConfig) -> dict[RecommendationType, BaseStrategy]:
    """
    创建完整的策略集合

    返回:
        dict[RecommendationType, BaseStrategy]: 四个基础策略与混合策略
    """
    strategies: dict[RecommendationType, BaseStrategy] = {
        strategy_type: strategy_class(settings)
        for strategy_type, strategy_class in STRATEGY_MAPPING.items()
    }
    strategies[RecommendationType.HYBRID] = HybridStrategy(
        settings,
        {strategy_type.value: strategy for strategy_type, strategy in strategies.items()}
    )
    return strategies


__all__ = [
    "BaseStrategy",
    "CollaborativeStrategy",
    "ContentBasedStrategy",
    "HybridStrategy",
    "RecentlyViewedStrategy",
    "TrendingStrategy",
    "STRATEGY_MAPPING",
    "create_strategies",
    "merge_weighted_results",
    "recency_score",
    "strategy_limit",
]
