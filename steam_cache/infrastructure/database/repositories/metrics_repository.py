"""Concrete repository implementation for cache metrics."""

from datetime import datetime

from sqlalchemy import and_, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from steam_cache.application.interfaces import MetricsRepository
from steam_cache.application.services.freshness_oracle import as_utc
from steam_cache.domain.entities import CacheOverview
from steam_cache.infrastructure.database.models import (
    GameModel,
    ReviewAggregateModel,
    ReviewFeedStateModel,
    ReviewModel,
    SearchCacheEntryModel,
)


class SQLAlchemyMetricsRepository(MetricsRepository):
    """Counts computed in SQL; nothing is loaded row by row."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _scalar(self, stmt) -> int:
        return (await self._session.scalar(stmt)) or 0

    async def overview(self, *, stale_before: datetime, threshold_hours: float) -> CacheOverview:
        fresh_sync = exists().where(
            and_(
                ReviewFeedStateModel.app_id == GameModel.app_id,
                ReviewFeedStateModel.synced_at >= stale_before,
            )
        )
        fresh_review = exists().where(
            and_(
                ReviewModel.app_id == GameModel.app_id,
                ReviewModel.ingested_at >= stale_before,
            )
        )
        missing_aggregate = ~exists().where(ReviewAggregateModel.app_id == GameModel.app_id)

        last_aggregate_sync = await self._session.scalar(select(func.max(ReviewAggregateModel.updated_at)))
        last_review_ingested = await self._session.scalar(select(func.max(ReviewModel.ingested_at)))

        return CacheOverview(
            threshold_hours=threshold_hours,
            total_games=await self._scalar(select(func.count()).select_from(GameModel)),
            placeholder_games=await self._scalar(
                select(func.count()).select_from(GameModel).where(GameModel.is_placeholder.is_(True))
            ),
            total_review_aggregates=await self._scalar(
                select(func.count()).select_from(ReviewAggregateModel)
            ),
            games_missing_aggregates=await self._scalar(
                select(func.count()).select_from(GameModel).where(missing_aggregate)
            ),
            stale_review_aggregates=await self._scalar(
                select(func.count())
                .select_from(ReviewAggregateModel)
                .where(ReviewAggregateModel.updated_at < stale_before)
            ),
            total_reviews=await self._scalar(select(func.count()).select_from(ReviewModel)),
            stale_review_feeds=await self._scalar(
                select(func.count()).select_from(GameModel).where(~fresh_sync, ~fresh_review)
            ),
            cached_search_entries=await self._scalar(
                select(func.count()).select_from(SearchCacheEntryModel)
            ),
            cached_search_terms=await self._scalar(
                select(func.count(func.distinct(SearchCacheEntryModel.search_term)))
            ),
            last_aggregate_sync=as_utc(last_aggregate_sync) if last_aggregate_sync else None,
            last_review_ingested=as_utc(last_review_ingested) if last_review_ingested else None,
        )
