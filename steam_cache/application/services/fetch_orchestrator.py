"""Fetch Orchestrator — serve from the store when fresh, else go to Steam.

Per request:

    CheckFreshness → ServeLocal                      (fresh)
                   → FetchRemote → UpsertLocal       (stale or missing)
                   → Respond (tagged with from_cache)

A missing game row always triggers a best-effort metadata fetch first.
Its failure is logged, reported as a ``SideFetchOutcome`` and replaced
by a placeholder row; it never fails the request. Upstream failures of
the requested entity come back as ``success=False``. Store failures
(``StoreUnavailable``) propagate. Nothing is retried.

No store connection is held while Steam is being called.
"""

from steam_cache.application.interfaces import EntityStore, SteamSource
from steam_cache.application.services.freshness_oracle import FreshnessOracle
from steam_cache.application.services.pagination_stitcher import (
    ExhaustedPlan,
    LocalPlan,
    PaginationStitcher,
    RemotePlan,
)
from steam_cache.application.services.upsert_coordinator import UpsertCoordinator
from steam_cache.domain.entities import (
    CachePolicy,
    EndCursor,
    GameBundle,
    GameDetails,
    ReviewAggregate,
    ReviewsPage,
    SideFetchOutcome,
    SideFetchStatus,
    StartCursor,
    UpstreamCursor,
    decode_cursor,
)
from steam_cache.domain.entities.cursor import upstream_token
from steam_cache.domain.exceptions import InvalidPayload, UpstreamUnavailable
from steam_cache.infrastructure.logging.colored_logger import CacheLogger, CacheStage

log = CacheLogger(__name__)

_UPSTREAM_ERRORS = (UpstreamUnavailable, InvalidPayload)


class FetchOrchestrator:
    """Coordinates freshness checks, Steam calls and upserts for one app id."""

    def __init__(
        self,
        store: EntityStore,
        steam: SteamSource,
        policy: CachePolicy,
        freshness: FreshnessOracle | None = None,
        upserts: UpsertCoordinator | None = None,
        stitcher: PaginationStitcher | None = None,
    ):
        self._store = store
        self._steam = steam
        self._policy = policy
        self._freshness = freshness or FreshnessOracle(policy.threshold_hours)
        self._upserts = upserts or UpsertCoordinator(store, clock=self._freshness.now)
        self._stitcher = stitcher or PaginationStitcher(store, self._freshness)

    # ── Freshness ────────────────────────────────────────────────────

    async def is_refresh_needed(self, app_id: str) -> bool:
        """True if the game is missing or its aggregate or review feed is stale."""
        async with self._store.transaction() as scope:
            game = await scope.games.get(app_id)
            if game is None:
                return True
            aggregate = await scope.aggregates.get(app_id)
            feed_updated_at = await scope.reviews.get_feed_last_updated(app_id)
        return self._freshness.needs_refresh(
            game_exists=True,
            aggregate_updated_at=aggregate.updated_at if aggregate else None,
            feed_updated_at=feed_updated_at,
        )

    async def get_review_aggregate(self, app_id: str) -> ReviewAggregate | None:
        """Stored aggregate, without any freshness check or remote call."""
        async with self._store.transaction() as scope:
            return await scope.aggregates.get(app_id)

    # ── Game bundle (metadata + aggregate) ───────────────────────────

    async def fetch_game_bundle(self, app_id: str) -> GameBundle:
        log.step(CacheStage.CHECK, "Checking freshness", app_id=app_id)
        if not await self.is_refresh_needed(app_id):
            async with self._store.transaction() as scope:
                game = await scope.games.get(app_id)
                aggregate = await scope.aggregates.get(app_id)
            if aggregate is not None:
                log.step(CacheStage.CACHE_HIT, "Serving game bundle from store", app_id=app_id)
                return GameBundle(success=True, from_cache=True, game=game, aggregate=aggregate)

        side_fetch = await self._ensure_game(app_id)

        try:
            with log.timed_step(CacheStage.REMOTE, "Fetching review summary", app_id=app_id):
                envelope = await self._steam.get_review_summary(
                    app_id, self._policy.default_page_size
                )
        except _UPSTREAM_ERRORS as exc:
            return GameBundle(
                success=False,
                from_cache=False,
                message=f"Failed to fetch review summary from Steam: {exc}",
                side_fetch=side_fetch,
            )
        if not envelope.success or envelope.summary is None:
            log.warning(CacheStage.REMOTE, f"Steam reported no review summary for {app_id}")
            return GameBundle(
                success=False,
                from_cache=False,
                message="Steam returned an unsuccessful review summary response",
                side_fetch=side_fetch,
            )

        try:
            aggregate = await self._upserts.upsert_review_aggregate(app_id, envelope.summary)
        except InvalidPayload as exc:
            return GameBundle(
                success=False, from_cache=False, message=str(exc), side_fetch=side_fetch
            )
        # The first feed page rode along with the summary. Storing it also
        # marks the feed synced; a bad page leaves the feed stale.
        try:
            await self._upserts.upsert_reviews(app_id, envelope.reviews)
        except InvalidPayload as exc:
            log.warning(CacheStage.UPSERT, f"First review page rejected for {app_id}", error=exc)

        async with self._store.transaction() as scope:
            game = await scope.games.get(app_id)
        return GameBundle(
            success=True,
            from_cache=False,
            game=game,
            aggregate=aggregate,
            side_fetch=side_fetch,
        )

    # ── Game details (metadata only) ─────────────────────────────────

    async def fetch_game_details(self, app_id: str) -> GameDetails:
        """Stored metadata if real, otherwise fetched from Steam.

        Metadata is the requested entity here, so a failed fetch is reported
        rather than replaced by a placeholder.
        """
        async with self._store.transaction() as scope:
            game = await scope.games.get(app_id)
        if game is not None and not game.is_placeholder:
            log.step(CacheStage.CACHE_HIT, "Serving game details from store", app_id=app_id)
            return GameDetails(success=True, from_cache=True, game=game)

        try:
            with log.timed_step(CacheStage.REMOTE, "Fetching app metadata", app_id=app_id):
                envelope = await self._steam.get_app_metadata(app_id, self._policy.metadata_locale)
            if not envelope.success or envelope.data is None:
                raise UpstreamUnavailable("appdetails", f"no metadata for app {app_id}")
            stored = await self._upserts.upsert_game(app_id, envelope.data)
        except _UPSTREAM_ERRORS as exc:
            return GameDetails(
                success=False,
                from_cache=False,
                game=game,
                message=f"Failed to fetch game details from Steam: {exc}",
            )
        return GameDetails(success=True, from_cache=False, game=stored)

    # ── Reviews ──────────────────────────────────────────────────────

    async def fetch_reviews_page(
        self,
        app_id: str,
        cursor: str | None = "*",
        page_size: int | None = None,
        language: str | None = "all",
        review_filter: str = "recent",
    ) -> ReviewsPage:
        """Serve one page of reviews, locally or from Steam.

        Raises:
            ValueError: If ``cursor`` is a malformed local cursor.
        """
        size = self._policy.clamp_page_size(page_size)
        plan = await self._stitcher.plan(app_id, decode_cursor(cursor), language)

        match plan:
            case ExhaustedPlan():
                return ReviewsPage(success=True, from_cache=True, next_cursor=EndCursor())
            case LocalPlan(page=page):
                log.step(CacheStage.CACHE_HIT, "Serving reviews from store", app_id=app_id, page=page)
                return await self._stitcher.read_local_page(app_id, page, size, language)
            case RemotePlan(cursor=remote_cursor):
                return await self._fetch_remote_reviews(
                    app_id, remote_cursor, size, language, review_filter
                )
        raise TypeError(f"Unknown page plan: {type(plan).__name__}")

    async def _fetch_remote_reviews(
        self,
        app_id: str,
        cursor: StartCursor | UpstreamCursor,
        page_size: int,
        language: str | None,
        review_filter: str,
    ) -> ReviewsPage:
        side_fetch = await self._ensure_game(app_id)
        token = upstream_token(cursor)
        steam_language = (language or "all").strip().lower() or "all"

        try:
            with log.timed_step(CacheStage.REMOTE, "Fetching review page", app_id=app_id):
                envelope = await self._steam.get_reviews_page(
                    app_id,
                    token,
                    page_size,
                    review_filter=review_filter,
                    language=steam_language,
                )
        except _UPSTREAM_ERRORS as exc:
            return ReviewsPage(
                success=False,
                from_cache=False,
                message=f"Failed to fetch reviews from Steam: {exc}",
                side_fetch=side_fetch,
            )
        if not envelope.success:
            return ReviewsPage(
                success=False,
                from_cache=False,
                message="Steam returned an unsuccessful review page response",
                side_fetch=side_fetch,
            )

        try:
            await self._upserts.upsert_reviews(app_id, envelope.reviews)
        except InvalidPayload as exc:
            return ReviewsPage(
                success=False, from_cache=False, message=str(exc), side_fetch=side_fetch
            )

        # Rows seen before keep their first-seen body and ingested_at.
        async with self._store.transaction() as scope:
            reviews = await scope.reviews.get_many(
                [item.recommendationid for item in envelope.reviews]
            )
        next_token = (envelope.next_cursor or "").strip()
        exhausted = not next_token or next_token == token or not reviews
        return ReviewsPage(
            success=True,
            from_cache=False,
            reviews=reviews,
            next_cursor=EndCursor() if exhausted else UpstreamCursor(token=next_token),
            side_fetch=side_fetch,
        )

    # ── Metadata side fetch ──────────────────────────────────────────

    async def _ensure_game(self, app_id: str) -> SideFetchOutcome:
        """Make sure a game row exists before anything references it.

        Runs when the row is missing or still a placeholder. Upstream and
        payload errors are logged and downgraded; store errors propagate.
        """
        async with self._store.transaction() as scope:
            game = await scope.games.get(app_id)
        if game is not None and not game.is_placeholder:
            return SideFetchOutcome(status=SideFetchStatus.SKIPPED)

        try:
            with log.timed_step(CacheStage.REMOTE, "Fetching app metadata", app_id=app_id):
                envelope = await self._steam.get_app_metadata(app_id, self._policy.metadata_locale)
            if not envelope.success or envelope.data is None:
                raise UpstreamUnavailable("appdetails", f"no metadata for app {app_id}")
            await self._upserts.upsert_game(app_id, envelope.data)
            return SideFetchOutcome(status=SideFetchStatus.FETCHED)
        except _UPSTREAM_ERRORS as exc:
            log.warning(CacheStage.PLACEHOLDER, f"Metadata fetch failed for {app_id}", error=exc)
            error = str(exc)

        if game is not None:
            return SideFetchOutcome(status=SideFetchStatus.FAILED, error=error)
        await self._upserts.upsert_placeholder_game(app_id)
        return SideFetchOutcome(status=SideFetchStatus.PLACEHOLDER, error=error)
