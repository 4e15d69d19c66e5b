"""Pydantic DTOs for cache metrics and preload."""

from datetime import datetime

from pydantic import BaseModel, Field


class CacheOverviewResponse(BaseModel):
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
    backlog_estimate: int

    model_config = {"from_attributes": True}


class PreloadRequest(BaseModel):
    """Apps to warm; the configured list is used when none are given."""

    app_ids: list[str] | None = None
    limit: int = Field(100, ge=1, le=1000)


class PreloadAccepted(BaseModel):
    success: bool = True
    message: str
    total: int
