"""Entity Store backed by SQLAlchemy — one session per transaction scope."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from steam_cache.application.interfaces import EntityStore, StoreScope
from steam_cache.infrastructure.database.repositories import (
    SQLAlchemyFavoriteRepository,
    SQLAlchemyGameRepository,
    SQLAlchemyMetricsRepository,
    SQLAlchemyReviewAggregateRepository,
    SQLAlchemyReviewRepository,
    SQLAlchemySearchCacheRepository,
    SQLAlchemyUserRepository,
)
from steam_cache.infrastructure.database.session import Database


class SQLAlchemyEntityStore(EntityStore):
    """Implements the EntityStore port on top of ``Database``."""

    def __init__(self, database: Database):
        self._database = database

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreScope]:
        async with self._database.session() as session:
            yield StoreScope(
                games=SQLAlchemyGameRepository(session),
                aggregates=SQLAlchemyReviewAggregateRepository(session),
                reviews=SQLAlchemyReviewRepository(session),
                search_cache=SQLAlchemySearchCacheRepository(session),
                users=SQLAlchemyUserRepository(session),
                favorites=SQLAlchemyFavoriteRepository(session),
                metrics=SQLAlchemyMetricsRepository(session),
            )

    async def health_check(self) -> bool:
        return await self._database.health_check()
