"""
Recommendation Engine Configuration

推荐引擎的策略参数配置。混合推荐的权重与名额分配以数据形式声明，
可通过环境变量（JSON）整体覆盖。
"""

from pydantic import BaseModel, Field, PositiveInt
from pydantic_settings import BaseSettings


class StrategyProfile(BaseModel):
    """单个策略在混合推荐中的名额比例与得分权重"""

    limit_share: float = Field(gt=0.0, le=1.0, description="占请求数量的比例，向上取整")
    weight: float = Field(ge=0.0, description="合并前乘到原始得分上的权重")


def _default_hybrid_profiles() -> dict[str, StrategyProfile]:
    return {
        "collaborative": StrategyProfile(limit_share=0.3, weight=0.4),
        "content_based": StrategyProfile(limit_share=0.3, weight=0.3),
        "trending": StrategyProfile(limit_share=0.2, weight=0.2),
        "recently_viewed": StrategyProfile(limit_share=0.2, weight=0.1),
    }


class RecommendationConfig(BaseSettings):
    """
    推荐策略配置

    所有时间窗口均以天为单位，在应用层计算截止时间后作为绑定参数传入查询。
    """

    # 通用
    DEFAULT_LIMIT: PositiveInt = Field(
        default=10,
        description="未指定数量时返回的推荐条数"
    )

    MAX_LIMIT: PositiveInt = Field(
        default=100,
        description="单次请求允许的最大推荐条数"
    )

    STRATEGY_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0.0,
        description="单个策略的执行超时，超时按策略失败处理并返回空列表"
    )

    # 混合推荐
    HYBRID_STRATEGY_PROFILES: dict[str, StrategyProfile] = Field(
        default_factory=_default_hybrid_profiles,
        description="混合推荐中各策略的名额比例与权重"
    )

    # 协同过滤
    COLLABORATIVE_MAX_SIMILAR: PositiveInt = Field(
        default=20,
        description="参与协同过滤的相似客户上限"
    )

    COLLABORATIVE_SCORE_DIVISOR: PositiveInt = Field(
        default=10,
        description="购买次数归一化除数，score = min(count / divisor, 1)"
    )

    # 基于内容
    CONTENT_RECENT_VIEWS: PositiveInt = Field(
        default=5,
        description="用于推断兴趣类目的最近浏览记录条数"
    )

    CONTENT_TOP_CATEGORIES: PositiveInt = Field(
        default=3,
        description="取出现次数最多的类目数量，同时作为得分归一化分母"
    )

    # 热门趋势
    TRENDING_WINDOW_DAYS: PositiveInt = Field(
        default=7,
        description="热门统计时间窗口（天）"
    )

    TRENDING_MIN_EVENTS: PositiveInt = Field(
        default=3,
        description="入选热门所需的最少行为事件数"
    )

    TRENDING_VIEW_WEIGHT: int = Field(
        default=1,
        description="浏览事件的热度分"
    )

    TRENDING_PURCHASE_WEIGHT: int = Field(
        default=3,
        description="购买事件的热度分"
    )

    # 最近浏览
    RECENTLY_VIEWED_WINDOW_DAYS: PositiveInt = Field(
        default=30,
        description="最近浏览时间窗口（天）"
    )

    # 分析
    ANALYTICS_DEFAULT_DAYS: PositiveInt = Field(
        default=30,
        description="推荐效果分析的默认统计天数"
    )
