"""Read-model entities for ranking, keyword search and cache metrics."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class RankedGame:
    """A game joined with its aggregate, as listed by rankings and searches."""

    app_id: str
    name: str
    short_description: str | None
    header_image: str | None
    developers: list[str]
    publishers: list[str]
    total_reviews: int | None
    total_positive: int | None
    total_negative: int | None
    review_score: int | None
    review_score_desc: str | None
    positive_percentage: float | None
    stats_updated_at: datetime | None = None


@dataclass
class KeywordGameMatch:
    """A game whose reviews mention the searched keywords."""

    game: RankedGame
    review_matches: int
    keyword_coverage: int
    helpful_votes: int
    relevance_score: float


@dataclass
class LanguageCount:
    language: str
    total: int


@dataclass
class CacheOverview:
    """Counts describing how much is cached and how much of it is stale."""

    threshold_hours: float
    total_games: int
    placeholder_games: int
    total_review_aggregates: int
    games_missing_aggregates: int
    stale_review_aggregates: int
    total_reviews: int
    stale_review_feeds: int
    cached_search_entries: int
    cached_search_terms: int
    last_aggregate_sync: datetime | None
    last_review_ingested: datetime | None

    @property
    def backlog_estimate(self) -> int:
        return self.stale_review_aggregates + self.stale_review_feeds + self.games_missing_aggregates
