from .behavior_repo import BehaviorRepository
from .catalog_repo import CatalogRepository
from .preference_repo import PreferenceRepository
from .recommendation_repo import RecommendationRepository
from .tenant_repo import TenantRepository
from .view_repo import ProductViewRepository


__all__ = [
    "BehaviorRepository",
    "CatalogRepository",
    "PreferenceRepository",
    "ProductViewRepository",
    "RecommendationRepository",
    "TenantRepository",
]
