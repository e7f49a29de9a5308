from .recommendation_config import RecommendationConfig, StrategyProfile


class ModuleConfig(
    RecommendationConfig,
):
    pass


__all__ = ["ModuleConfig", "RecommendationConfig", "StrategyProfile"]
