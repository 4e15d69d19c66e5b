"""Results returned by the fetch orchestrator.

Every result carries ``success``/``message`` for expected failures
(upstream down, bad payload) and ``from_cache`` so callers can tell a
cache hit from a fresh fetch.
"""

from dataclasses import dataclass, field
from enum import Enum

from .cursor import Cursor, EndCursor
from .game import Game
from .review import Review
from .review_aggregate import ReviewAggregate


class SideFetchStatus(str, Enum):
    """What happened to the best-effort metadata fetch."""

    SKIPPED = "skipped"            # game already stored with real metadata
    FETCHED = "fetched"            # metadata fetched and stored
    PLACEHOLDER = "placeholder"    # fetch failed, placeholder row created
    FAILED = "failed"              # fetch failed, existing placeholder kept


@dataclass
class SideFetchOutcome:
    """Observable record of the metadata side fetch."""

    status: SideFetchStatus
    error: str | None = None

    @property
    def attempted(self) -> bool:
        return self.status is not SideFetchStatus.SKIPPED

    @property
    def succeeded(self) -> bool:
        return self.status is SideFetchStatus.FETCHED


@dataclass
class GameBundle:
    """Game metadata plus its review aggregate."""

    success: bool
    from_cache: bool
    game: Game | None = None
    aggregate: ReviewAggregate | None = None
    message: str = ""
    side_fetch: SideFetchOutcome | None = None


@dataclass
class GameDetails:
    """Game metadata on its own."""

    success: bool
    from_cache: bool
    game: Game | None = None
    message: str = ""


@dataclass
class ReviewsPage:
    """One page of reviews, local or remote.

    ``total_count`` is only known for locally served pages. Remote pages
    carry the stored rows, so a review seen before keeps its first-seen
    body and ``ingested_at``.
    """

    success: bool
    from_cache: bool
    reviews: list[Review] = field(default_factory=list)
    next_cursor: Cursor = field(default_factory=EndCursor)
    total_count: int | None = None
    message: str = ""
    side_fetch: SideFetchOutcome | None = None
