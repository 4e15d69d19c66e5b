"""Pagination Stitcher — chooses between the local store and the Steam feed.

Two inputs decide the source of a review page:

    cursor           Start | Offset(page) | Upstream(token) | End
    feed freshness   per the FreshnessOracle

    Start,  fresh feed, ≥1 local row   → local page 1
    Start,  anything else              → remote, from the start of the feed
    Offset                             → local, always (a session never leaves offset mode)
    Upstream                           → remote, token passed through
    End                                → nothing left
"""

from dataclasses import dataclass

from steam_cache.application.interfaces import EntityStore
from steam_cache.application.services.freshness_oracle import FreshnessOracle
from steam_cache.domain.entities import (
    Cursor,
    EndCursor,
    OffsetCursor,
    ReviewsPage,
    StartCursor,
    UpstreamCursor,
    normalize_language_filter,
)


@dataclass(frozen=True)
class LocalPlan:
    page: int


@dataclass(frozen=True)
class RemotePlan:
    cursor: StartCursor | UpstreamCursor


@dataclass(frozen=True)
class ExhaustedPlan:
    pass


PagePlan = LocalPlan | RemotePlan | ExhaustedPlan


class PaginationStitcher:
    """Plans where a review page comes from and serves local pages."""

    def __init__(self, store: EntityStore, freshness: FreshnessOracle):
        self._store = store
        self._freshness = freshness

    async def plan(self, app_id: str, cursor: Cursor, language: str | None = None) -> PagePlan:
        match cursor:
            case EndCursor():
                return ExhaustedPlan()
            case OffsetCursor(page=page):
                return LocalPlan(page=page)
            case UpstreamCursor():
                return RemotePlan(cursor=cursor)
            case StartCursor():
                return await self._plan_first_page(app_id, language)
        raise TypeError(f"Unknown cursor type: {type(cursor).__name__}")

    async def _plan_first_page(self, app_id: str, language: str | None) -> PagePlan:
        language_filter = normalize_language_filter(language)
        async with self._store.transaction() as scope:
            feed_updated_at = await scope.reviews.get_feed_last_updated(app_id)
            if self._freshness.is_stale(feed_updated_at):
                return RemotePlan(cursor=StartCursor())
            local_rows = await scope.reviews.count(app_id, language_filter)
        if local_rows == 0:
            return RemotePlan(cursor=StartCursor())
        return LocalPlan(page=1)

    async def read_local_page(
        self, app_id: str, page: int, page_size: int, language: str | None = None
    ) -> ReviewsPage:
        """Serve an offset page from the store; offsets are ``(page - 1) * page_size``."""
        if page < 1:
            raise ValueError("page must be >= 1")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        offset = (page - 1) * page_size
        async with self._store.transaction() as scope:
            reviews, total = await scope.reviews.list_page(
                app_id,
                limit=page_size,
                offset=offset,
                language=normalize_language_filter(language),
            )
        has_more = offset + page_size < total
        return ReviewsPage(
            success=True,
            from_cache=True,
            reviews=reviews,
            next_cursor=OffsetCursor(page=page + 1) if has_more else EndCursor(),
            total_count=total,
        )
