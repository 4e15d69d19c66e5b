"""Abstract Entity Store — the unit of work the cache services run in."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from .game_repository import GameRepository
from .metrics_repository import MetricsRepository
from .review_aggregate_repository import ReviewAggregateRepository
from .review_repository import ReviewRepository
from .search_cache_repository import SearchCacheRepository
from .user_repository import FavoriteRepository, UserRepository


@dataclass
class StoreScope:
    """Repositories bound to one transaction."""

    games: GameRepository
    aggregates: ReviewAggregateRepository
    reviews: ReviewRepository
    search_cache: SearchCacheRepository
    users: UserRepository
    favorites: FavoriteRepository
    metrics: MetricsRepository


class EntityStore(ABC):
    """Port owning persistence and uniqueness enforcement.

    ``transaction()`` hands out a scope on a pooled connection. It commits
    when the block exits cleanly, rolls back on any exception and always
    releases the connection.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[StoreScope]:
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the store answers a trivial query."""
        ...
