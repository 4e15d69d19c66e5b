"""Pydantic models for payloads received from the Steam store.

Steam omits fields, sends ``null`` for others and mixes strings with
numbers. Each field states its default here, once, instead of scattering
fallbacks through the services:

    text fields         → None (``review`` body → "")
    lists               → []
    counts / scores     → 0
    flags               → False
    language            → lower-cased, "unknown" when blank
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from steam_cache.domain.entities import Game, Review, ReviewAggregate, normalize_language
from steam_cache.domain.entities.game import placeholder_name
from steam_cache.domain.exceptions import InvalidPayload


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


# ── Metadata (appdetails) ────────────────────────────────────────────


class AppMetadataPayload(BaseModel):
    """The ``data`` object of an appdetails response."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    short_description: str | None = None
    header_image: str | None = None
    developers: list[str] = Field(default_factory=list)
    publishers: list[str] = Field(default_factory=list)
    price_overview: dict[str, Any] | None = None
    release_date: dict[str, Any] | None = None

    @field_validator("developers", "publishers", mode="before")
    @classmethod
    def lists_default_empty(cls, value: Any) -> Any:
        return _or_default(value, [])

    def to_entity(self, app_id: str, now: datetime) -> Game:
        """Full replacement row for the game; every field comes from this payload."""
        if not app_id or not str(app_id).strip():
            raise InvalidPayload("Game", "missing app_id")
        name = (self.name or "").strip() or placeholder_name(app_id)
        return Game(
            app_id=str(app_id),
            name=name,
            short_description=self.short_description or None,
            header_image=self.header_image or None,
            developers=list(self.developers),
            publishers=list(self.publishers),
            price_overview=self.price_overview,
            release_date=self.release_date,
            is_placeholder=False,
            created_at=now,
            updated_at=now,
        )


class AppMetadataEnvelope(BaseModel):
    """Per-app envelope: ``{"<app_id>": {"success": bool, "data": {...}}}``."""

    success: bool = False
    data: AppMetadataPayload | None = None


# ── Review summary (appreviews query_summary) ────────────────────────


class ReviewSummaryPayload(BaseModel):
    """``query_summary`` of an appreviews response."""

    model_config = ConfigDict(extra="ignore")

    num_reviews: int = Field(0, ge=0)
    review_score: int = 0
    review_score_desc: str | None = None
    total_positive: int = Field(0, ge=0)
    total_negative: int = Field(0, ge=0)
    total_reviews: int = Field(0, ge=0)

    @field_validator(
        "num_reviews", "review_score", "total_positive", "total_negative", "total_reviews",
        mode="before",
    )
    @classmethod
    def counts_default_zero(cls, value: Any) -> Any:
        return _or_default(value, 0)

    def to_entity(self, app_id: str, now: datetime) -> ReviewAggregate:
        if not app_id or not str(app_id).strip():
            raise InvalidPayload("ReviewAggregate", "missing app_id")
        return ReviewAggregate(
            app_id=str(app_id),
            total_reviews=self.total_reviews,
            total_positive=self.total_positive,
            total_negative=self.total_negative,
            review_score=self.review_score,
            review_score_desc=self.review_score_desc or None,
            updated_at=now,
        )


# ── Review feed (appreviews reviews[]) ───────────────────────────────


class ReviewAuthorPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    steamid: str | None = None
    playtime_forever: int = 0
    playtime_at_review: int = 0

    @field_validator("steamid", mode="before")
    @classmethod
    def stringify_steamid(cls, value: Any) -> Any:
        return str(value) if value is not None else None

    @field_validator("playtime_forever", "playtime_at_review", mode="before")
    @classmethod
    def playtime_default_zero(cls, value: Any) -> Any:
        return _or_default(value, 0)


class ReviewItemPayload(BaseModel):
    """One element of the ``reviews`` list."""

    model_config = ConfigDict(extra="ignore")

    recommendationid: str | None = None
    author: ReviewAuthorPayload = Field(default_factory=ReviewAuthorPayload)
    language: str | None = None
    review: str = ""
    timestamp_created: int = 0
    timestamp_updated: int = 0
    voted_up: bool = False
    votes_up: int = 0
    votes_funny: int = 0
    weighted_vote_score: float = 0.0
    comment_count: int = 0
    steam_purchase: bool = False
    received_for_free: bool = False
    written_during_early_access: bool = False

    @field_validator("author", mode="before")
    @classmethod
    def author_default_empty(cls, value: Any) -> Any:
        return _or_default(value, {})

    @field_validator("review", mode="before")
    @classmethod
    def body_default_empty(cls, value: Any) -> Any:
        return _or_default(value, "")

    @field_validator(
        "timestamp_created", "timestamp_updated", "votes_up", "votes_funny", "comment_count",
        mode="before",
    )
    @classmethod
    def counts_default_zero(cls, value: Any) -> Any:
        return _or_default(value, 0)

    @field_validator("weighted_vote_score", mode="before")
    @classmethod
    def score_default_zero(cls, value: Any) -> Any:
        return _or_default(value, 0.0)

    @field_validator(
        "voted_up", "steam_purchase", "received_for_free", "written_during_early_access",
        mode="before",
    )
    @classmethod
    def flags_default_false(cls, value: Any) -> Any:
        return _or_default(value, False)

    @field_validator("recommendationid", mode="before")
    @classmethod
    def stringify_id(cls, value: Any) -> Any:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def to_entity(self, app_id: str, ingested_at: datetime) -> Review:
        """Row for this review. The recommendation id is the natural key."""
        if self.recommendationid is None:
            raise InvalidPayload("Review", "missing recommendationid")
        return Review(
            recommendation_id=self.recommendationid,
            app_id=str(app_id),
            author_steam_id=self.author.steamid,
            author_playtime_forever=self.author.playtime_forever,
            author_playtime_at_review=self.author.playtime_at_review,
            voted_up=self.voted_up,
            votes_up=self.votes_up,
            votes_funny=self.votes_funny,
            weighted_vote_score=self.weighted_vote_score,
            comment_count=self.comment_count,
            steam_purchase=self.steam_purchase,
            received_for_free=self.received_for_free,
            written_during_early_access=self.written_during_early_access,
            review=self.review,
            timestamp_created=self.timestamp_created,
            timestamp_updated=self.timestamp_updated,
            language=normalize_language(self.language),
            ingested_at=ingested_at,
        )


class ReviewsPageEnvelope(BaseModel):
    """An appreviews page: reviews plus Steam's cursor for the next page."""

    success: bool = False
    reviews: list[ReviewItemPayload] = Field(default_factory=list)
    next_cursor: str | None = None
    summary: ReviewSummaryPayload | None = None


class ReviewSummaryEnvelope(BaseModel):
    """Review counters, plus the first page of the feed when one was asked for.

    Steam answers ``query_summary`` and ``reviews[]`` from the same
    appreviews call, so a summary refresh can also refresh the feed.
    """

    success: bool = False
    summary: ReviewSummaryPayload | None = None
    reviews: list[ReviewItemPayload] = Field(default_factory=list)
    next_cursor: str | None = None


# ── App search (SearchApps) ──────────────────────────────────────────


class AppSearchHitPayload(BaseModel):
    """One hit of the community SearchApps endpoint."""

    model_config = ConfigDict(extra="ignore")

    appid: str
    name: str
    header_image: str | None = None

    @field_validator("appid", mode="before")
    @classmethod
    def stringify_appid(cls, value: Any) -> Any:
        return str(value).strip() if value is not None else value
