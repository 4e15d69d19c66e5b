"""Pydantic DTOs (Data Transfer Objects) for games and review aggregates."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from steam_cache.domain.entities import GameBundle, GameDetails, SideFetchOutcome


class GameResponse(BaseModel):
    """Schema returned to the client."""

    app_id: str
    name: str
    short_description: str | None
    header_image: str | None
    developers: list[str]
    publishers: list[str]
    price_overview: dict[str, Any] | None
    release_date: dict[str, Any] | None
    is_placeholder: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ReviewAggregateResponse(BaseModel):
    app_id: str
    total_reviews: int
    total_positive: int
    total_negative: int
    review_score: int
    review_score_desc: str | None
    positive_percentage: float | None
    updated_at: datetime

    model_config = {"from_attributes": True}


class SideFetchResponse(BaseModel):
    """What happened to the metadata fetch made on the side of a request."""

    status: str
    error: str | None = None

    @classmethod
    def from_outcome(cls, outcome: SideFetchOutcome | None) -> "SideFetchResponse | None":
        if outcome is None:
            return None
        return cls(status=outcome.status.value, error=outcome.error)


class GameBundleResponse(BaseModel):
    success: bool
    from_cache: bool
    message: str = ""
    game: GameResponse | None = None
    review_stats: ReviewAggregateResponse | None = None
    side_fetch: SideFetchResponse | None = None

    @classmethod
    def from_result(cls, bundle: GameBundle) -> "GameBundleResponse":
        return cls(
            success=bundle.success,
            from_cache=bundle.from_cache,
            message=bundle.message,
            game=GameResponse.model_validate(bundle.game) if bundle.game else None,
            review_stats=(
                ReviewAggregateResponse.model_validate(bundle.aggregate)
                if bundle.aggregate
                else None
            ),
            side_fetch=SideFetchResponse.from_outcome(bundle.side_fetch),
        )


class GameDetailsResponse(BaseModel):
    success: bool
    from_cache: bool
    message: str = ""
    game: GameResponse | None = None

    @classmethod
    def from_result(cls, details: GameDetails) -> "GameDetailsResponse":
        return cls(
            success=details.success,
            from_cache=details.from_cache,
            message=details.message,
            game=GameResponse.model_validate(details.game) if details.game else None,
        )


class RankedGameResponse(BaseModel):
    """A game listed with its review counters."""

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

    model_config = {"from_attributes": True}


class TopGamesResponse(BaseModel):
    success: bool = True
    games: list[RankedGameResponse]
    total: int


class LanguageCountResponse(BaseModel):
    language: str
    total: int

    model_config = {"from_attributes": True}
