"""Abstract repository interface (port) for cache metrics."""

from abc import ABC, abstractmethod
from datetime import datetime

from steam_cache.domain.entities import CacheOverview


class MetricsRepository(ABC):

    @abstractmethod
    async def overview(self, *, stale_before: datetime, threshold_hours: float) -> CacheOverview:
        """Cache counts, treating anything last updated before ``stale_before`` as stale."""
        ...
