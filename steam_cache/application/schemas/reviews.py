"""Pydantic DTOs for review pages and keyword-matched reviews."""

from datetime import datetime

from pydantic import BaseModel

from steam_cache.domain.entities import ReviewsPage, encode_cursor

from .games import SideFetchResponse


class ReviewResponse(BaseModel):
    """Schema returned to the client."""

    recommendation_id: str
    app_id: str
    author_steam_id: str | None
    author_playtime_forever: int
    author_playtime_at_review: int
    voted_up: bool
    votes_up: int
    votes_funny: int
    weighted_vote_score: float
    comment_count: int
    steam_purchase: bool
    received_for_free: bool
    written_during_early_access: bool
    review: str
    timestamp_created: int
    timestamp_updated: int
    language: str
    ingested_at: datetime

    model_config = {"from_attributes": True}


class ReviewsPageResponse(BaseModel):
    """One page of reviews. ``cursor`` is empty once the feed is exhausted."""

    success: bool
    from_cache: bool
    message: str = ""
    reviews: list[ReviewResponse]
    cursor: str
    total_count: int | None = None
    side_fetch: SideFetchResponse | None = None

    @classmethod
    def from_result(cls, page: ReviewsPage) -> "ReviewsPageResponse":
        return cls(
            success=page.success,
            from_cache=page.from_cache,
            message=page.message,
            reviews=[ReviewResponse.model_validate(r) for r in page.reviews],
            cursor=encode_cursor(page.next_cursor),
            total_count=page.total_count,
            side_fetch=SideFetchResponse.from_outcome(page.side_fetch),
        )


class KeywordReviewsResponse(BaseModel):
    success: bool = True
    app_id: str
    keywords: list[str]
    reviews: list[ReviewResponse]
    total: int
