"""Application service reporting how much is cached and how stale it is."""

from datetime import timedelta

from steam_cache.application.interfaces import EntityStore
from steam_cache.application.services.freshness_oracle import FreshnessOracle
from steam_cache.domain.entities import CacheOverview


class CacheMetricsService:

    def __init__(self, store: EntityStore, freshness: FreshnessOracle):
        self._store = store
        self._freshness = freshness

    async def overview(self) -> CacheOverview:
        threshold = self._freshness.threshold_hours
        stale_before = self._freshness.now() - timedelta(hours=threshold)
        async with self._store.transaction() as scope:
            return await scope.metrics.overview(stale_before=stale_before, threshold_hours=threshold)
