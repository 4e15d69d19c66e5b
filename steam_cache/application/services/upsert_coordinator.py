"""Upsert Coordinator — merges Steam payloads into the Entity Store.

Holds no state of its own. Each operation opens its own transaction
scope, so a multi-row batch is either committed whole or not at all and
the connection is released before the method returns.

Semantics per entity:
    Game, ReviewAggregate   insert or overwrite every column (keyed by app id)
    Review                  insert or skip (keyed by recommendation id)
    SearchCacheEntry        insert or skip (keyed by term + app id)
"""

from steam_cache.application.interfaces import EntityStore
from steam_cache.application.schemas.steam import (
    AppMetadataPayload,
    AppSearchHitPayload,
    ReviewItemPayload,
    ReviewSummaryPayload,
)
from steam_cache.application.services.freshness_oracle import Clock, utc_now
from steam_cache.domain.entities import Game, ReviewAggregate, SearchCacheEntry
from steam_cache.domain.exceptions import InvalidPayload
from steam_cache.infrastructure.logging.colored_logger import CacheLogger, CacheStage

log = CacheLogger(__name__)


def _require_app_id(app_id: str | None, entity_type: str) -> str:
    if app_id is None or not str(app_id).strip():
        raise InvalidPayload(entity_type, "missing app_id")
    return str(app_id).strip()


class UpsertCoordinator:
    """Idempotent writes of external data, keyed by natural identifiers."""

    def __init__(self, store: EntityStore, clock: Clock = utc_now):
        self._store = store
        self._clock = clock

    async def upsert_game(self, app_id: str, payload: AppMetadataPayload) -> Game:
        """Store full metadata for ``app_id``, replacing any previous row."""
        app_id = _require_app_id(app_id, "Game")
        game = payload.to_entity(app_id, self._clock())
        async with self._store.transaction() as scope:
            stored = await scope.games.upsert(game)
        log.step(CacheStage.UPSERT, "Game metadata stored", app_id=app_id, name=stored.name)
        return stored

    async def upsert_placeholder_game(self, app_id: str) -> Game:
        """Create a name-only game row unless one already exists.

        Never overwrites: a concurrent request may have stored real metadata.
        """
        app_id = _require_app_id(app_id, "Game")
        placeholder = Game.placeholder(app_id, now=self._clock())
        async with self._store.transaction() as scope:
            inserted = await scope.games.insert_if_absent(placeholder)
            stored = await scope.games.get(app_id)
        if inserted:
            log.step(CacheStage.PLACEHOLDER, "Placeholder game created", app_id=app_id)
        return stored if stored is not None else placeholder

    async def upsert_review_aggregate(
        self, app_id: str, payload: ReviewSummaryPayload
    ) -> ReviewAggregate:
        """Replace the aggregate wholesale; its timestamp becomes now."""
        app_id = _require_app_id(app_id, "ReviewAggregate")
        aggregate = payload.to_entity(app_id, self._clock())
        async with self._store.transaction() as scope:
            stored = await scope.aggregates.upsert(aggregate)
        log.step(
            CacheStage.UPSERT,
            "Review aggregate stored",
            app_id=app_id,
            total=stored.total_reviews,
            desc=stored.review_score_desc,
        )
        return stored

    async def upsert_reviews(self, app_id: str, reviews: list[ReviewItemPayload]) -> int:
        """Insert one feed page atomically and return how many rows were new.

        Reviews already stored are skipped and keep their first-seen fields.
        Any bad item (missing recommendation id, constraint violation) rolls
        back the whole page. A successful call also marks the feed as synced.
        """
        app_id = _require_app_id(app_id, "Review")
        ingested_at = self._clock()
        inserted = 0
        async with self._store.transaction() as scope:
            for item in reviews:
                review = item.to_entity(app_id, ingested_at)
                if await scope.reviews.insert_if_absent(review):
                    inserted += 1
            await scope.reviews.mark_feed_synced(app_id, ingested_at)
        log.step(
            CacheStage.UPSERT,
            "Review page stored",
            app_id=app_id,
            received=len(reviews),
            inserted=inserted,
        )
        return inserted

    async def save_search_results(self, term: str, hits: list[AppSearchHitPayload]) -> int:
        """Remember upstream search hits under the lower-cased term, atomically."""
        normalized = term.strip().lower()
        if not normalized:
            raise InvalidPayload("SearchCacheEntry", "empty search term")
        if not hits:
            return 0
        now = self._clock()
        inserted = 0
        async with self._store.transaction() as scope:
            for hit in hits:
                entry = SearchCacheEntry(
                    search_term=normalized,
                    app_id=_require_app_id(hit.appid, "SearchCacheEntry"),
                    name=hit.name,
                    header_image=hit.header_image,
                    created_at=now,
                )
                if await scope.search_cache.insert_if_absent(entry):
                    inserted += 1
        log.step(CacheStage.UPSERT, "Search results cached", term=normalized, inserted=inserted)
        return inserted
