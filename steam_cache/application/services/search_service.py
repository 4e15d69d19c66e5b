"""Application service for game search, keyword search and rankings."""

import logging
import re
from dataclasses import dataclass, field

from steam_cache.application.interfaces import EntityStore, SteamSource
from steam_cache.application.services.upsert_coordinator import UpsertCoordinator
from steam_cache.domain.entities import (
    GameSearchHit,
    KeywordGameMatch,
    LanguageCount,
    RankedGame,
    Review,
)
from steam_cache.domain.exceptions import InvalidPayload, UpstreamUnavailable

logger = logging.getLogger(__name__)

MIN_TERM_LENGTH = 2
TOP_RATED_SORTS = frozenset({"rating", "reviews", "recent"})

_KEYWORD_SPLIT = re.compile(r"[,;\s]+")


def parse_keywords(raw: str | list[str] | None) -> list[str]:
    """Split on commas, semicolons and whitespace; lower-case; drop blanks and repeats."""
    if raw is None:
        return []
    parts = raw if isinstance(raw, list) else _KEYWORD_SPLIT.split(raw)
    keywords: list[str] = []
    for part in parts:
        for token in _KEYWORD_SPLIT.split(part):
            token = token.strip().lower()
            if token and token not in keywords:
                keywords.append(token)
    return keywords


@dataclass
class GameSearchResult:
    success: bool
    from_cache: bool
    games: list[GameSearchHit] = field(default_factory=list)
    message: str = ""


class SearchService:
    """Name search with a three-level fallback, plus read-only review queries.

    Name search order: stored games, then remembered search results, then
    Steam. Steam hits are remembered under the lower-cased term.
    """

    def __init__(self, store: EntityStore, steam: SteamSource, upserts: UpsertCoordinator):
        self._store = store
        self._steam = steam
        self._upserts = upserts

    async def search_games(self, term: str | None, limit: int = 10) -> GameSearchResult:
        query = (term or "").strip()
        if len(query) < MIN_TERM_LENGTH:
            return GameSearchResult(
                success=False,
                from_cache=False,
                message=f"Type at least {MIN_TERM_LENGTH} characters to search",
            )

        async with self._store.transaction() as scope:
            local_games = await scope.games.search_by_name(query, limit)
            if local_games:
                logger.info("Found %d stored games for '%s'", len(local_games), query)
                return GameSearchResult(
                    success=True,
                    from_cache=True,
                    games=[GameSearchHit.build(g.app_id, g.name, g.header_image) for g in local_games],
                )
            cached = await scope.search_cache.search(query, limit)
        if cached:
            logger.info("Found %d cached search hits for '%s'", len(cached), query)
            return GameSearchResult(
                success=True,
                from_cache=True,
                games=[GameSearchHit.build(e.app_id, e.name, e.header_image) for e in cached],
            )

        try:
            hits = await self._steam.search_apps(query)
        except (UpstreamUnavailable, InvalidPayload) as exc:
            logger.warning("Steam app search failed for '%s': %s", query, exc)
            return GameSearchResult(
                success=False, from_cache=False, message=f"Failed to search Steam: {exc}"
            )
        usable = [h for h in hits if h.appid]
        if len(usable) < len(hits):
            logger.warning(
                "Dropped %d Steam search hits without an app id for '%s'",
                len(hits) - len(usable),
                query,
            )
        hits = usable[:limit]
        if not hits:
            return GameSearchResult(success=True, from_cache=False, message="No games found")

        await self._upserts.save_search_results(query, hits)
        return GameSearchResult(
            success=True,
            from_cache=False,
            games=[GameSearchHit.build(h.appid, h.name, h.header_image) for h in hits],
        )

    async def search_games_by_keywords(
        self, keywords: list[str], limit: int = 20, min_matches: int = 1
    ) -> list[KeywordGameMatch]:
        if not keywords:
            return []
        async with self._store.transaction() as scope:
            return await scope.reviews.search_games_by_keywords(
                keywords, limit=limit, min_matches=max(1, min_matches)
            )

    async def search_reviews_by_keywords(
        self, app_id: str, keywords: list[str], limit: int = 10
    ) -> list[Review]:
        if not keywords:
            return []
        async with self._store.transaction() as scope:
            return await scope.reviews.search_by_keywords(app_id, keywords, limit=limit)

    async def top_rated_games(
        self, limit: int = 50, min_reviews: int = 100, sort: str = "rating"
    ) -> list[RankedGame]:
        if sort not in TOP_RATED_SORTS:
            sort = "rating"
        async with self._store.transaction() as scope:
            return await scope.games.top_rated(limit=limit, min_reviews=min_reviews, sort=sort)

    async def review_language_stats(self, app_id: str) -> list[LanguageCount]:
        async with self._store.transaction() as scope:
            return await scope.reviews.language_stats(app_id)
