from enum import StrEnum


class TenantStatus(StrEnum):
    """租户状态枚举"""
    ACTIVE = "ACTIVE"          # 活跃
    SUSPENDED = "SUSPENDED"    # 暂停
    CLOSED = "CLOSED"          # 关闭


class BehaviorAction(StrEnum):
    """客户行为类型"""
    VIEW = "view"
    ADD_TO_CART = "add_to_cart"
    REMOVE_FROM_CART = "remove_from_cart"
    PURCHASE = "purchase"
    SEARCH = "search"


class RecommendationType(StrEnum):
    """推荐策略类型"""
    COLLABORATIVE = "collaborative"
    CONTENT_BASED = "content_based"
    TRENDING = "trending"
    RECENTLY_VIEWED = "recently_viewed"
    HYBRID = "hybrid"


class FeedbackAction(StrEnum):
    """推荐反馈动作，值与推荐记录上的布尔字段同名"""
    SHOWN = "shown"
    CLICKED = "clicked"
    PURCHASED = "purchased"


class PreferenceType(StrEnum):
    """客户偏好维度"""
    CATEGORY = "category"
    BRAND = "brand"
    PRICE_RANGE = "price_range"


def enum_values(enum_cls) -> list[str]:
    """供 SQLAlchemy Enum 列按值（而非成员名）持久化"""
    return [member.value for member in enum_cls]
