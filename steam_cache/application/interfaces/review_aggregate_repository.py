"""Abstract repository interface (port) for review aggregates."""

from abc import ABC, abstractmethod

from steam_cache.domain.entities import ReviewAggregate


class ReviewAggregateRepository(ABC):
    """Port for review aggregate persistence."""

    @abstractmethod
    async def get(self, app_id: str) -> ReviewAggregate | None:
        ...

    @abstractmethod
    async def upsert(self, aggregate: ReviewAggregate) -> ReviewAggregate:
        """Insert or replace the whole aggregate row."""
        ...
