from .game import GameModel, ReviewAggregateModel
from .review import ReviewFeedStateModel, ReviewModel
from .search_cache import SearchCacheEntryModel
from .user import FavoriteModel, UserModel

__all__ = [
    "GameModel",
    "ReviewAggregateModel",
    "ReviewModel",
    "ReviewFeedStateModel",
    "SearchCacheEntryModel",
    "UserModel",
    "FavoriteModel",
]
