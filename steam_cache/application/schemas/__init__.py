from .cache import CacheOverviewResponse, PreloadAccepted, PreloadRequest
from .games import (
    GameBundleResponse,
    GameDetailsResponse,
    GameResponse,
    LanguageCountResponse,
    RankedGameResponse,
    ReviewAggregateResponse,
    SideFetchResponse,
    TopGamesResponse,
)
from .reviews import KeywordReviewsResponse, ReviewResponse, ReviewsPageResponse
from .search import (
    GameSearchHitResponse,
    GameSearchResponse,
    KeywordGameMatchResponse,
    KeywordSearchResponse,
)
from .users import FavoriteCreate, FavoriteResponse, UserCreate, UserResponse

__all__ = [
    "CacheOverviewResponse",
    "PreloadAccepted",
    "PreloadRequest",
    "GameBundleResponse",
    "GameDetailsResponse",
    "GameResponse",
    "LanguageCountResponse",
    "RankedGameResponse",
    "ReviewAggregateResponse",
    "SideFetchResponse",
    "TopGamesResponse",
    "KeywordReviewsResponse",
    "ReviewResponse",
    "ReviewsPageResponse",
    "GameSearchHitResponse",
    "GameSearchResponse",
    "KeywordGameMatchResponse",
    "KeywordSearchResponse",
    "FavoriteCreate",
    "FavoriteResponse",
    "UserCreate",
    "UserResponse",
]
