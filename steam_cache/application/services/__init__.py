from .cache_metrics_service import CacheMetricsService
from .favorite_service import FavoriteService
from .fetch_orchestrator import FetchOrchestrator
from .freshness_oracle import FreshnessOracle, is_stale
from .pagination_stitcher import PaginationStitcher
from .preload_service import PreloadReport, PreloadService
from .search_service import GameSearchResult, SearchService, parse_keywords
from .upsert_coordinator import UpsertCoordinator

__all__ = [
    "CacheMetricsService",
    "FavoriteService",
    "FetchOrchestrator",
    "FreshnessOracle",
    "is_stale",
    "PaginationStitcher",
    "PreloadReport",
    "PreloadService",
    "GameSearchResult",
    "SearchService",
    "parse_keywords",
    "UpsertCoordinator",
]
