from .game_repository import SQLAlchemyGameRepository, SQLAlchemyReviewAggregateRepository
from .metrics_repository import SQLAlchemyMetricsRepository
from .review_repository import SQLAlchemyReviewRepository
from .search_cache_repository import SQLAlchemySearchCacheRepository
from .user_repository import SQLAlchemyFavoriteRepository, SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyGameRepository",
    "SQLAlchemyReviewAggregateRepository",
    "SQLAlchemyMetricsRepository",
    "SQLAlchemyReviewRepository",
    "SQLAlchemySearchCacheRepository",
    "SQLAlchemyFavoriteRepository",
    "SQLAlchemyUserRepository",
]
