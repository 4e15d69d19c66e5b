"""FastAPI dependency injection — wires infrastructure to application layer.

The entity store and Steam client are process-wide and live on
``app.state`` (built in the lifespan); services are cheap and are built
per request around them.
"""

from fastapi import Depends, Request

from steam_cache.application.interfaces import EntityStore, SteamSource
from steam_cache.application.services import (
    CacheMetricsService,
    FavoriteService,
    FetchOrchestrator,
    FreshnessOracle,
    PreloadService,
    SearchService,
    UpsertCoordinator,
)
from steam_cache.config import Settings
from steam_cache.domain.entities import CachePolicy


def get_entity_store(request: Request) -> EntityStore:
    """The shared store created at startup."""
    return request.app.state.entity_store


def get_steam_source(request: Request) -> SteamSource:
    """The shared Steam client created at startup."""
    return request.app.state.steam_source


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_cache_policy(settings: Settings = Depends(get_app_settings)) -> CachePolicy:
    return settings.cache_policy()


def get_freshness_oracle(policy: CachePolicy = Depends(get_cache_policy)) -> FreshnessOracle:
    return FreshnessOracle(policy.threshold_hours)


def get_upsert_coordinator(
    store: EntityStore = Depends(get_entity_store),
    freshness: FreshnessOracle = Depends(get_freshness_oracle),
) -> UpsertCoordinator:
    return UpsertCoordinator(store, clock=freshness.now)


async def get_fetch_orchestrator(
    store: EntityStore = Depends(get_entity_store),
    steam: SteamSource = Depends(get_steam_source),
    policy: CachePolicy = Depends(get_cache_policy),
    freshness: FreshnessOracle = Depends(get_freshness_oracle),
    upserts: UpsertCoordinator = Depends(get_upsert_coordinator),
) -> FetchOrchestrator:
    """Provides a FetchOrchestrator wired to the shared store and Steam client."""
    return FetchOrchestrator(store, steam, policy, freshness=freshness, upserts=upserts)


async def get_search_service(
    store: EntityStore = Depends(get_entity_store),
    steam: SteamSource = Depends(get_steam_source),
    upserts: UpsertCoordinator = Depends(get_upsert_coordinator),
) -> SearchService:
    return SearchService(store, steam, upserts)


async def get_favorite_service(
    store: EntityStore = Depends(get_entity_store),
    upserts: UpsertCoordinator = Depends(get_upsert_coordinator),
) -> FavoriteService:
    return FavoriteService(store, upserts)


async def get_cache_metrics_service(
    store: EntityStore = Depends(get_entity_store),
    freshness: FreshnessOracle = Depends(get_freshness_oracle),
) -> CacheMetricsService:
    return CacheMetricsService(store, freshness)


async def get_preload_service(
    orchestrator: FetchOrchestrator = Depends(get_fetch_orchestrator),
    settings: Settings = Depends(get_app_settings),
) -> PreloadService:
    return PreloadService(orchestrator, delay_seconds=settings.preload_delay_seconds)
