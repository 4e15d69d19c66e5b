from .entity_store import EntityStore, StoreScope
from .game_repository import GameRepository
from .metrics_repository import MetricsRepository
from .review_aggregate_repository import ReviewAggregateRepository
from .review_repository import ReviewRepository
from .search_cache_repository import SearchCacheRepository
from .steam_source import SteamSource
from .user_repository import FavoriteRepository, UserRepository

__all__ = [
    "EntityStore",
    "StoreScope",
    "GameRepository",
    "MetricsRepository",
    "ReviewAggregateRepository",
    "ReviewRepository",
    "SearchCacheRepository",
    "SteamSource",
    "FavoriteRepository",
    "UserRepository",
]
