"""Concrete repository implementation for remembered search hits."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from steam_cache.application.interfaces import SearchCacheRepository
from steam_cache.application.services.freshness_oracle import as_utc
from steam_cache.domain.entities import SearchCacheEntry
from steam_cache.infrastructure.database.models import SearchCacheEntryModel

from .statements import dialect_insert, escape_like


class SQLAlchemySearchCacheRepository(SearchCacheRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def insert_if_absent(self, entry: SearchCacheEntry) -> bool:
        stmt = (
            dialect_insert(self._session, SearchCacheEntryModel)
            .values(
                search_term=entry.search_term,
                app_id=entry.app_id,
                name=entry.name,
                header_image=entry.header_image,
                created_at=entry.created_at,
            )
            .on_conflict_do_nothing(
                index_elements=[SearchCacheEntryModel.search_term, SearchCacheEntryModel.app_id]
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def search(self, term: str, limit: int = 10) -> list[SearchCacheEntry]:
        needle = term.strip().lower()
        if not needle:
            return []
        latest = func.max(SearchCacheEntryModel.created_at).label("latest")
        stmt = (
            select(
                SearchCacheEntryModel.app_id,
                func.min(SearchCacheEntryModel.name).label("name"),
                func.max(SearchCacheEntryModel.header_image).label("header_image"),
                latest,
            )
            .where(SearchCacheEntryModel.search_term.like(f"%{escape_like(needle)}%", escape="\\"))
            .group_by(SearchCacheEntryModel.app_id)
            .order_by(latest.desc(), SearchCacheEntryModel.app_id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            SearchCacheEntry(
                search_term=needle,
                app_id=row.app_id,
                name=row.name,
                header_image=row.header_image,
                created_at=as_utc(row.latest),
            )
            for row in result.all()
        ]
