from .cache_policy import CachePolicy
from .cursor import (
    Cursor,
    EndCursor,
    OffsetCursor,
    StartCursor,
    UpstreamCursor,
    decode_cursor,
    encode_cursor,
)
from .fetch_result import (
    GameBundle,
    GameDetails,
    ReviewsPage,
    SideFetchOutcome,
    SideFetchStatus,
)
from .game import Game, placeholder_name
from .ranking import CacheOverview, KeywordGameMatch, LanguageCount, RankedGame
from .review import Review, normalize_language, normalize_language_filter
from .review_aggregate import ReviewAggregate
from .search_cache_entry import GameSearchHit, SearchCacheEntry
from .user import Favorite, User, normalize_email

__all__ = [
    "CachePolicy",
    "Cursor",
    "EndCursor",
    "OffsetCursor",
    "StartCursor",
    "UpstreamCursor",
    "decode_cursor",
    "encode_cursor",
    "GameBundle",
    "GameDetails",
    "ReviewsPage",
    "SideFetchOutcome",
    "SideFetchStatus",
    "Game",
    "placeholder_name",
    "CacheOverview",
    "KeywordGameMatch",
    "LanguageCount",
    "RankedGame",
    "Review",
    "normalize_language",
    "normalize_language_filter",
    "ReviewAggregate",
    "GameSearchHit",
    "SearchCacheEntry",
    "Favorite",
    "User",
    "normalize_email",
]
